"""Ballot Relay SDK — Data Models"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionResult(_CamelModel):
    """Successful relay call: a confirmed write, or the winning-proposal read."""
    message: str
    transaction_hash: str
    etherscan_link: str


class ErrorResult(_CamelModel):
    """Failed relay call; ``detailed_message`` is the server's serialized error."""
    message: str
    detailed_message: str


RelayResult = Union[TransactionResult, ErrorResult]


def parse_relay_result(body: dict[str, Any]) -> RelayResult:
    """Pick the result variant by its ``status`` tag.

    Untagged bodies are told apart by the presence of ``detailedMessage``.
    """
    status = body.get("status")
    if status == "error" or (status is None and "detailedMessage" in body):
        return ErrorResult.model_validate(body)
    return TransactionResult.model_validate(body)
