import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ballot_relay import __version__
from ballot_relay.api.deps import get_gateway
from ballot_relay.core.exceptions import RpcError
from ballot_relay.schemas.relay import HealthResponse
from ballot_relay.services.contract_gateway import ContractGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(gateway: ContractGateway = Depends(get_gateway)):
    """Liveness plus node reachability — 503 when the RPC node is down."""
    try:
        chain_id = await gateway.chain_id()
    except RpcError:
        logger.exception("Health check failed — RPC node unreachable")
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "version": __version__, "signer": gateway.signer_address},
        )
    return HealthResponse(
        status="healthy",
        version=__version__,
        chain_id=chain_id,
        signer=gateway.signer_address,
    )
