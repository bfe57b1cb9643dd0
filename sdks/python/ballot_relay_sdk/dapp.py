"""Dapp session — the client-side workflow over the relay backend and a wallet.

Keeps the last outcome of each operation so a UI can render it: a success
clears the previous error and an error clears the previous success.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Awaitable

from ballot_relay_sdk.client import BallotRelayClient
from ballot_relay_sdk.models import ErrorResult, RelayResult, TransactionResult
from ballot_relay_sdk.wallet import WalletSession

logger = logging.getLogger(__name__)

TOKEN_BALANCE_UNAVAILABLE = "Cannot load the token balance data"


@dataclass
class OperationState:
    info: TransactionResult | None = None
    error: ErrorResult | None = None
    loading: bool = False

    def record(self, result: RelayResult) -> None:
        if isinstance(result, ErrorResult):
            self.error, self.info = result, None
        else:
            self.info, self.error = result, None


def _parse_amount(value: str) -> str:
    """Normalize a user-typed amount to a decimal string, keeping every digit."""
    try:
        return str(Decimal(value.strip()))
    except InvalidOperation:
        raise ValueError(f"Invalid token amount: {value!r}")


class BallotDapp:
    def __init__(self, client: BallotRelayClient, wallet: WalletSession | None = None):
        self.client = client
        self.wallet = wallet

        self.my_token_contract_address: str | None = None
        self.tokenized_ballot_contract_address: str | None = None
        self.total_supply: float | None = None

        self.user_address: str | None = None
        self.user_eth_balance: float | None = None
        self.user_token_balance: float | str | None = None

        self.minting = OperationState()
        self.delegating = OperationState()
        self.voting = OperationState()
        self.winning_proposal = OperationState()

    @property
    def is_wallet_connected(self) -> bool:
        return self.user_address is not None

    # --- Contract info ---

    async def load_contract_addresses(self) -> None:
        self.tokenized_ballot_contract_address = await self.client.get_tokenized_ballot_contract_address()
        self.my_token_contract_address = await self.client.get_my_token_contract_address()
        await self.get_token_info()

    async def get_token_info(self) -> None:
        """Total supply, read from chain when a wallet is available."""
        if not self.my_token_contract_address:
            return
        if self.wallet is not None:
            self.total_supply = await self.wallet.total_supply(self.my_token_contract_address)
        else:
            self.total_supply = await self.client.get_total_supply()

    async def connect_wallet(self) -> None:
        if self.wallet is None:
            return
        self.user_address = await self.wallet.connect()
        self.user_eth_balance = await self.wallet.eth_balance()
        if self.my_token_contract_address:
            self.user_token_balance = await self.wallet.token_balance(self.my_token_contract_address)
        else:
            self.user_token_balance = TOKEN_BALANCE_UNAVAILABLE
        logger.info(f"Wallet connected: {self.user_address}")

    # --- Relay operations ---

    async def _run(self, state: OperationState, call: Awaitable[RelayResult]) -> RelayResult:
        state.loading = True
        try:
            result = await call
            state.record(result)
            return result
        finally:
            state.loading = False

    async def request_tokens(self, value: str) -> RelayResult:
        """Mint ``value`` tokens to the connected wallet."""
        if not self.user_address:
            raise RuntimeError("Connect a wallet before requesting tokens")
        return await self._run(
            self.minting, self.client.request_tokens(self.user_address, _parse_amount(value))
        )

    async def delegate(self, address: str) -> RelayResult:
        return await self._run(self.delegating, self.client.delegate(address))

    async def vote(self, proposal_id: str, amount: str) -> RelayResult:
        return await self._run(self.voting, self.client.vote(proposal_id, _parse_amount(amount)))

    async def get_winning_proposal(self) -> RelayResult:
        return await self._run(self.winning_proposal, self.client.get_winning_proposal())
