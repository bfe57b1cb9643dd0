"""Relay routes — contract reads and signed writes for the token and ballot."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from ballot_relay.api.deps import get_relay_service
from ballot_relay.schemas.relay import (
    AddressResponse,
    DelegateRequest,
    RelayResult,
    RequestTokenRequest,
    VoteRequest,
)
from ballot_relay.services.relay_service import RelayService

router = APIRouter(tags=["relay"])


@router.get("/my-token-contract-address", response_model=AddressResponse)
async def get_my_token_contract_address(service: RelayService = Depends(get_relay_service)):
    return AddressResponse(result=service.get_my_token_contract_address())


@router.get("/tokenized-ballot-contract-address", response_model=AddressResponse)
async def get_tokenized_ballot_contract_address(service: RelayService = Depends(get_relay_service)):
    return AddressResponse(result=service.get_tokenized_ballot_contract_address())


@router.get("/total-supply", response_model=float)
async def get_total_supply(service: RelayService = Depends(get_relay_service)):
    return await service.get_total_supply()


@router.get("/allowance", response_model=float)
async def get_allowance(
    from_: str = Query(..., alias="from"),
    to: str = Query(...),
    service: RelayService = Depends(get_relay_service),
):
    return await service.get_allowance(from_, to)


@router.get("/transaction-status/{txn_hash}", response_model=str)
async def get_transaction_status(txn_hash: str, service: RelayService = Depends(get_relay_service)):
    return await service.get_transaction_status(txn_hash)


@router.get("/transaction-receipt/{txn_hash}")
async def get_transaction_receipt(
    txn_hash: str, service: RelayService = Depends(get_relay_service)
) -> dict[str, Any] | None:
    return await service.get_transaction_receipt(txn_hash)


@router.post("/request-tokens", response_model=RelayResult)
async def request_tokens(
    body: RequestTokenRequest = Body(..., description="Example payload (Address, amount)"),
    service: RelayService = Depends(get_relay_service),
):
    """Mint ``amount`` tokens to ``address``."""
    return await service.request_tokens(body.address, body.amount)


@router.post("/delegate", response_model=RelayResult)
async def delegate(
    body: DelegateRequest = Body(..., description="Example payload (Delegatee Address)"),
    service: RelayService = Depends(get_relay_service),
):
    """Delegate the signer's voting power to ``delegatee``."""
    return await service.delegate(body.delegatee)


@router.post("/vote", response_model=RelayResult)
async def vote(
    body: VoteRequest = Body(..., description="Example payload (ProposalId, Amount)"),
    service: RelayService = Depends(get_relay_service),
):
    """Cast ``amount`` votes for ``proposalId`` from the signer's account."""
    return await service.vote(body.proposal_id, body.amount)


@router.get("/winning-proposal", response_model=RelayResult)
async def get_winning_proposal(service: RelayService = Depends(get_relay_service)):
    return await service.get_winning_proposal()
