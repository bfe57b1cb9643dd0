"""FastAPI dependencies for the relay routes."""

from fastapi import Depends, Request

from ballot_relay.config import settings
from ballot_relay.services.contract_gateway import ContractGateway
from ballot_relay.services.relay_service import RelayService


def get_gateway(request: Request) -> ContractGateway:
    """The gateway built by the app lifespan."""
    return request.app.state.gateway


def get_relay_service(gateway: ContractGateway = Depends(get_gateway)) -> RelayService:
    return RelayService(
        gateway,
        explorer_base_url=settings.explorer_base_url,
        token_symbol=settings.token_symbol,
    )
