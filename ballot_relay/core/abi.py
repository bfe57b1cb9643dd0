"""Minimal ABI-driven call encoding on top of eth-abi.

A ``Contract`` binds an address to its ABI and hands out ``ContractFunction``
objects that turn Python arguments into ``eth_call`` / transaction data and
decode the returned bytes.
"""

from __future__ import annotations

from typing import Any

from eth_abi import decode, encode
from eth_utils import decode_hex, encode_hex, function_signature_to_4byte_selector, to_checksum_address


class ContractFunction:
    def __init__(self, fragment: dict[str, Any]):
        self.name: str = fragment["name"]
        self.input_types: list[str] = [i["type"] for i in fragment.get("inputs", [])]
        self.output_types: list[str] = [o["type"] for o in fragment.get("outputs", [])]
        self.mutates: bool = fragment.get("stateMutability") not in ("view", "pure")
        self.signature = f"{self.name}({','.join(self.input_types)})"
        self.selector: bytes = function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: Any) -> str:
        """Return the 0x-prefixed calldata for this function and ``args``."""
        if len(args) != len(self.input_types):
            raise TypeError(
                f"{self.signature} takes {len(self.input_types)} argument(s), got {len(args)}"
            )
        return encode_hex(self.selector + encode(self.input_types, list(args)))

    def decode_output(self, data: str) -> Any:
        """Decode ``eth_call`` return data.

        Single-output functions return the bare value, multi-output ones a tuple.
        """
        raw = decode_hex(data)
        if not self.output_types:
            return None
        if not raw:
            raise ValueError(f"{self.signature} returned no data")
        values = decode(self.output_types, raw)
        if len(values) == 1:
            return values[0]
        return tuple(values)


class Contract:
    """A deployed contract: checksummed address plus its callable functions."""

    def __init__(self, address: str, abi: list[dict[str, Any]]):
        self.address = to_checksum_address(address)
        self._functions = {
            fragment["name"]: ContractFunction(fragment)
            for fragment in abi
            if fragment.get("type") == "function"
        }

    def function(self, name: str) -> ContractFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise ValueError(f"Function '{name}' not found in ABI of {self.address}")
