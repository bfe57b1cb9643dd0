"""Async JSON-RPC 2.0 client for an Ethereum node, built on httpx."""

from __future__ import annotations

import itertools
import logging
from typing import Any

import httpx

from ballot_relay.core.exceptions import RpcError

logger = logging.getLogger(__name__)


class RpcClient:
    """Thin JSON-RPC provider: one POST per call, no batching, no retries."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._ids = itertools.count(1)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        try:
            resp = await self._client.post(self.url, json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as exc:
            raise RpcError(f"{method} failed: {exc}") from exc
        except ValueError as exc:
            raise RpcError(f"{method} returned a non-JSON response") from exc

        if not isinstance(body, dict):
            raise RpcError(f"{method} returned a malformed JSON-RPC response")

        error = body.get("error")
        if error:
            if not isinstance(error, dict):
                raise RpcError(str(error))
            raise RpcError(
                error.get("message", "Unknown JSON-RPC error"),
                code=error.get("code"),
                data=error.get("data"),
            )
        return body.get("result")

    # --- eth_* helpers ---

    async def chain_id(self) -> int:
        return int(await self.request("eth_chainId"), 16)

    async def block_number(self) -> int:
        return int(await self.request("eth_blockNumber"), 16)

    async def gas_price(self) -> int:
        return int(await self.request("eth_gasPrice"), 16)

    async def get_transaction_count(self, address: str, block: str = "pending") -> int:
        return int(await self.request("eth_getTransactionCount", [address, block]), 16)

    async def estimate_gas(self, tx: dict[str, Any]) -> int:
        return int(await self.request("eth_estimateGas", [tx]), 16)

    async def call(self, tx: dict[str, Any], block: str = "latest") -> str:
        return await self.request("eth_call", [tx, block])

    async def send_raw_transaction(self, raw_tx: str) -> str:
        return await self.request("eth_sendRawTransaction", [raw_tx])

    async def get_transaction(self, tx_hash: str) -> dict[str, Any] | None:
        return await self.request("eth_getTransactionByHash", [tx_hash])

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        return await self.request("eth_getTransactionReceipt", [tx_hash])
