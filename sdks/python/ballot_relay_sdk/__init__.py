"""Ballot Relay Python SDK — client for the relay backend plus a wallet session."""

__version__ = "0.1.0"

from ballot_relay_sdk.client import BallotRelayClient
from ballot_relay_sdk.dapp import BallotDapp, OperationState
from ballot_relay_sdk.models import ErrorResult, TransactionResult, parse_relay_result
from ballot_relay_sdk.wallet import WalletError, WalletSession

__all__ = [
    "BallotDapp",
    "BallotRelayClient",
    "ErrorResult",
    "OperationState",
    "TransactionResult",
    "WalletError",
    "WalletSession",
    "parse_relay_result",
]
