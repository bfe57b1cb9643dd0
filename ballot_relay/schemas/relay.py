"""Request and response DTOs for the relay endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# JSON numbers with a fraction arrive as binary floats; send a decimal string
# ("0.123456789012345678") for exact fractional amounts.
TokenAmount = Annotated[
    Union[int, str, float],
    Field(description="Token amount; a decimal string is taken exactly"),
]


# --- Requests ---


class RequestTokenRequest(_CamelModel):
    address: str
    amount: TokenAmount

    model_config = ConfigDict(
        json_schema_extra={"example": {"address": "0xfcC5fB101131630Bd2154A7f0BcDC433159325c6", "amount": "5000"}},
    )


class DelegateRequest(_CamelModel):
    delegatee: str


class VoteRequest(_CamelModel):
    proposal_id: int
    amount: TokenAmount

    model_config = ConfigDict(
        json_schema_extra={"example": {"proposalId": 1, "amount": "5000"}},
    )


# --- Responses ---


class AddressResponse(BaseModel):
    result: str


class TransactionResponse(_CamelModel):
    status: Literal["success"] = "success"
    message: str
    transaction_hash: str
    etherscan_link: str


class ErrorMessage(_CamelModel):
    status: Literal["error"] = "error"
    message: str
    detailed_message: str


RelayResult = Annotated[Union[TransactionResponse, ErrorMessage], Field(discriminator="status")]


class HealthResponse(_CamelModel):
    status: str
    version: str
    chain_id: int | None = None
    signer: str | None = None
