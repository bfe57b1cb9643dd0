"""Fixed-point conversions for 18-decimal token amounts and bytes32 strings."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

TOKEN_DECIMALS = 18
WEI_PER_TOKEN = Decimal(10) ** TOKEN_DECIMALS


def format_ether(value: int) -> float:
    """Convert an on-chain 18-decimal integer into a float token amount."""
    return float(Decimal(int(value)) / WEI_PER_TOKEN)


def parse_ether(amount: Decimal | int | float | str) -> int:
    """Convert a human-readable token amount into its 18-decimal integer.

    Raises ValueError when the amount is not a finite number or carries
    more fractional digits than the token supports.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Invalid token amount: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Invalid token amount: {amount!r}")

    scaled = value * WEI_PER_TOKEN
    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"Token amount {amount} has more than {TOKEN_DECIMALS} decimal places"
        )
    return int(scaled)


def parse_bytes32_string(value: bytes) -> str:
    """Decode a null-padded bytes32 value into text."""
    if len(value) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(value)}")
    return value.rstrip(b"\x00").decode("utf-8")


def format_bytes32_string(text: str) -> bytes:
    encoded = text.encode("utf-8")
    if len(encoded) > 31:
        raise ValueError("bytes32 string must be shorter than 32 bytes")
    return encoded.ljust(32, b"\x00")
