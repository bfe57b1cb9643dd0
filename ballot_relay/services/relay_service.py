"""Relay service — maps each endpoint onto a contract read or signed write.

Writes (mint, delegate, vote) and the winning-proposal lookup never raise:
any failure is serialized into an ErrorMessage. Plain reads let errors
propagate to the app-level handlers.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Awaitable, Callable

from ballot_relay.core.exceptions import RpcError
from ballot_relay.core.units import format_ether, parse_bytes32_string, parse_ether
from ballot_relay.schemas.relay import ErrorMessage, TransactionResponse
from ballot_relay.services.contract_gateway import ContractGateway

logger = logging.getLogger(__name__)

NO_HASH = "No hash. It was reading operation."
NO_ETHERSCAN_LINK = "No etherscan link. It was reading operation."


def describe_error(exc: BaseException) -> str:
    """Serialize an exception into the JSON string carried by ErrorMessage."""
    detail: dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, RpcError):
        detail.update(code=exc.code, data=exc.data)
    tx_hash = getattr(exc, "tx_hash", None)
    if tx_hash:
        detail["transactionHash"] = tx_hash
    return json.dumps(detail, default=str)


class RelayService:
    def __init__(self, gateway: ContractGateway, explorer_base_url: str, token_symbol: str = "MTK"):
        self.gateway = gateway
        self.explorer_base_url = explorer_base_url.rstrip("/")
        self.token_symbol = token_symbol

    def etherscan_link(self, tx_hash: str) -> str:
        return f"{self.explorer_base_url}/tx/{tx_hash}"

    # --- Reads ---

    def get_my_token_contract_address(self) -> str:
        return self.gateway.token.address

    def get_tokenized_ballot_contract_address(self) -> str:
        return self.gateway.ballot.address

    async def get_total_supply(self) -> float:
        supply = await self.gateway.read(self.gateway.token, "totalSupply")
        return format_ether(supply)

    async def get_allowance(self, owner: str, spender: str) -> float:
        allowance = await self.gateway.read(self.gateway.token, "allowance", owner, spender)
        return format_ether(allowance)

    async def get_transaction_status(self, tx_hash: str) -> str:
        tx = await self.gateway.get_transaction(tx_hash)
        return "Success" if tx and tx.get("blockNumber") else "Fail"

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        return await self.gateway.get_transaction(tx_hash)

    # --- Writes ---

    async def _write(
        self,
        submit: Callable[[], Awaitable[dict[str, Any]]],
        success_message: str,
        error_message: str,
    ) -> TransactionResponse | ErrorMessage:
        try:
            receipt = await submit()
        except Exception as exc:
            logger.exception(error_message)
            return ErrorMessage(message=error_message, detailed_message=describe_error(exc))

        tx_hash = receipt["transactionHash"]
        return TransactionResponse(
            message=success_message,
            transaction_hash=tx_hash,
            etherscan_link=self.etherscan_link(tx_hash),
        )

    async def request_tokens(
        self, address: str, amount: Decimal | int | float | str
    ) -> TransactionResponse | ErrorMessage:
        async def submit():
            return await self.gateway.send_and_wait(
                self.gateway.token, "mint", address, parse_ether(amount)
            )

        return await self._write(
            submit,
            success_message=f"Successfully minted {amount} {self.token_symbol} to {address}.",
            error_message=f"Error while minting tokens to {address}",
        )

    async def delegate(self, delegatee: str) -> TransactionResponse | ErrorMessage:
        async def submit():
            return await self.gateway.send_and_wait(self.gateway.token, "delegate", delegatee)

        return await self._write(
            submit,
            success_message=f"Successfully delegated votes to account address {delegatee}.",
            error_message=f"Error delegating to {delegatee}",
        )

    async def vote(
        self, proposal_id: int, amount: Decimal | int | float | str
    ) -> TransactionResponse | ErrorMessage:
        async def submit():
            return await self.gateway.send_and_wait(
                self.gateway.ballot, "vote", proposal_id, parse_ether(amount)
            )

        return await self._write(
            submit,
            success_message=f"Successfully voted for proposal with ID {proposal_id}.",
            error_message=f"Error voting for proposal Id: {proposal_id}",
        )

    async def get_winning_proposal(self) -> TransactionResponse | ErrorMessage:
        ballot = self.gateway.ballot
        try:
            index = await self.gateway.read(ballot, "winningProposal")
            name_bytes, vote_count = await self.gateway.read(ballot, "proposals", index)
            name = parse_bytes32_string(name_bytes)
            votes = format_ether(vote_count)
        except Exception as exc:
            logger.exception("Error while getting winning proposal")
            return ErrorMessage(
                message="Error while getting winning proposal.",
                detailed_message=describe_error(exc),
            )

        return TransactionResponse(
            message=(
                f"Winning proposal has ID: {index}. "
                f"Proposal name: {name}. Proposal vote count: {votes}."
            ),
            transaction_hash=NO_HASH,
            etherscan_link=NO_ETHERSCAN_LINK,
        )
