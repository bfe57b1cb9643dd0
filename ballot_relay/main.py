"""Ballot Relay — FastAPI backend."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ballot_relay import __version__
from ballot_relay.config import settings, validate_settings
from ballot_relay.core.exceptions import RpcError
from ballot_relay.services.contract_gateway import ContractGateway

logger = logging.getLogger(__name__)
logging.basicConfig(level=settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the contract gateway on startup and close its HTTP pool on shutdown."""
    validate_settings(settings)

    # Tests install their own gateway before the app starts.
    owns_gateway = getattr(app.state, "gateway", None) is None
    if owns_gateway:
        app.state.gateway = ContractGateway.from_settings(settings)
    gateway: ContractGateway = app.state.gateway
    logger.info(
        f"Relaying to {settings.resolved_rpc_url.split('/v2/')[0]} "
        f"(token={gateway.token.address}, ballot={gateway.ballot.address}, "
        f"signer={gateway.signer_address or 'none'})"
    )

    yield

    if owns_gateway:
        await gateway.aclose()
        app.state.gateway = None
    logger.info("Contract gateway closed on shutdown.")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
        return response


async def rpc_error_handler(request: Request, exc: RpcError) -> JSONResponse:
    logger.error(f"RPC error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Ballot Relay API",
        description="Relays HTTP requests to the MyToken and TokenizedBallot contracts",
        version=__version__,
        lifespan=lifespan,
    )

    allowed_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RpcError, rpc_error_handler)

    from ballot_relay.api import API_ROUTERS

    for router in API_ROUTERS:
        app.include_router(router)

    return app


app = create_app()
