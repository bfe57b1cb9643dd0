"""Wallet session — user-initiated chain reads through a wallet's JSON-RPC endpoint.

Plays the part of the browser wallet extension: the wallet owns the keys and
exposes the user's account through ``eth_requestAccounts``; this session only
reads balances and token supply.
"""

from __future__ import annotations

import itertools
from decimal import Decimal
from typing import Any

import httpx
from eth_abi import decode, encode
from eth_utils import decode_hex, encode_hex, function_signature_to_4byte_selector, to_checksum_address

WEI_PER_ETHER = Decimal(10) ** 18

_TOTAL_SUPPLY = function_signature_to_4byte_selector("totalSupply()")
_BALANCE_OF = function_signature_to_4byte_selector("balanceOf(address)")


class WalletError(Exception):
    """Raised when the wallet endpoint rejects a request or returns no account."""


def _to_float(wei: int) -> float:
    return float(Decimal(wei) / WEI_PER_ETHER)


class WalletSession:
    def __init__(
        self,
        rpc_url: str = "http://localhost:8545",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.rpc_url = rpc_url
        self.address: str | None = None
        self._ids = itertools.count(1)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def is_connected(self) -> bool:
        return self.address is not None

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _rpc(self, method: str, params: list[Any] | None = None) -> Any:
        resp = await self._client.post(
            self.rpc_url,
            json={"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []},
        )
        resp.raise_for_status()
        body = resp.json()
        if body.get("error"):
            raise WalletError(body["error"].get("message", f"{method} failed"))
        return body.get("result")

    async def connect(self) -> str:
        """Ask the wallet for the user's accounts and remember the first one."""
        accounts = await self._rpc("eth_requestAccounts")
        if not accounts:
            raise WalletError("Wallet returned no accounts")
        self.address = to_checksum_address(accounts[0])
        return self.address

    async def eth_balance(self) -> float:
        if not self.address:
            raise WalletError("Wallet is not connected")
        return _to_float(int(await self._rpc("eth_getBalance", [self.address, "latest"]), 16))

    async def _call_uint(self, to: str, data: bytes) -> int:
        result = await self._rpc("eth_call", [{"to": to, "data": encode_hex(data)}, "latest"])
        (value,) = decode(["uint256"], decode_hex(result))
        return value

    async def token_balance(self, token_address: str) -> float:
        if not self.address:
            raise WalletError("Wallet is not connected")
        data = _BALANCE_OF + encode(["address"], [self.address])
        return _to_float(await self._call_uint(token_address, data))

    async def total_supply(self, token_address: str) -> float:
        return _to_float(await self._call_uint(token_address, _TOTAL_SUPPLY))
