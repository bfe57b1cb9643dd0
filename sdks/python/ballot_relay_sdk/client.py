"""Ballot Relay API client with async support."""

from __future__ import annotations

from typing import Any

import httpx

from ballot_relay_sdk.models import RelayResult, parse_relay_result


class BallotRelayClient:
    """Async client for the Ballot Relay backend."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: int = 120,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> BallotRelayClient:
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Use 'async with BallotRelayClient() as client:'")
        return self._client

    # --- Contract addresses ---

    async def get_my_token_contract_address(self) -> str:
        resp = await self.client.get("/my-token-contract-address")
        resp.raise_for_status()
        return resp.json()["result"]

    async def get_tokenized_ballot_contract_address(self) -> str:
        resp = await self.client.get("/tokenized-ballot-contract-address")
        resp.raise_for_status()
        return resp.json()["result"]

    # --- Reads ---

    async def get_total_supply(self) -> float:
        resp = await self.client.get("/total-supply")
        resp.raise_for_status()
        return resp.json()

    async def get_allowance(self, owner: str, spender: str) -> float:
        resp = await self.client.get("/allowance", params={"from": owner, "to": spender})
        resp.raise_for_status()
        return resp.json()

    async def get_transaction_status(self, tx_hash: str) -> str:
        resp = await self.client.get(f"/transaction-status/{tx_hash}")
        resp.raise_for_status()
        return resp.json()

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        resp = await self.client.get(f"/transaction-receipt/{tx_hash}")
        resp.raise_for_status()
        return resp.json()

    # --- Writes ---

    async def request_tokens(self, address: str, amount: str | int) -> RelayResult:
        """Mint tokens to ``address``. Pass fractional amounts as decimal strings."""
        resp = await self.client.post("/request-tokens", json={"address": address, "amount": amount})
        resp.raise_for_status()
        return parse_relay_result(resp.json())

    async def delegate(self, delegatee: str) -> RelayResult:
        resp = await self.client.post("/delegate", json={"delegatee": delegatee})
        resp.raise_for_status()
        return parse_relay_result(resp.json())

    async def vote(self, proposal_id: int | str, amount: str | int) -> RelayResult:
        resp = await self.client.post("/vote", json={"proposalId": proposal_id, "amount": amount})
        resp.raise_for_status()
        return parse_relay_result(resp.json())

    async def get_winning_proposal(self) -> RelayResult:
        resp = await self.client.get("/winning-proposal")
        resp.raise_for_status()
        return parse_relay_result(resp.json())
