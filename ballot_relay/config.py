"""Application configuration using pydantic-settings."""

import logging

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    environment: str = "development"  # development | test | production
    log_level: str = "INFO"

    # Network
    rpc_url: str = ""  # empty => Alchemy URL for `network` if a key is set, else local node
    network: str = "goerli"
    alchemy_api_key: str = ""
    chain_id: int | None = None  # None => ask the node via eth_chainId
    rpc_timeout_seconds: float = 30.0

    # Signer (writes are rejected with an ErrorMessage when unset)
    signer_private_key: str = Field(
        default="",
        validation_alias=AliasChoices("signer_private_key", "metamask_wallet_private_key"),
    )

    # Contracts
    my_token_contract_address: str = "0x9A750A01629649975DC1F4e608aB203016F55180"
    tokenized_ballot_contract_address: str = "0xD7B7419e9FaC3D687a206e0656Ec7938049aA9e2"
    token_symbol: str = "MTK"

    # Confirmations
    confirmations: int = 1
    receipt_poll_interval_seconds: float = 2.0
    receipt_timeout_seconds: float = 120.0

    # Explorer
    explorer_base_url: str = "https://goerli.etherscan.io"

    # CORS (Angular dev server by default)
    cors_origins: str = "http://localhost:4200"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def resolved_rpc_url(self) -> str:
        if self.rpc_url:
            return self.rpc_url
        if self.alchemy_api_key:
            return f"https://eth-{self.network}.g.alchemy.com/v2/{self.alchemy_api_key}"
        return "http://localhost:8545"


settings = Settings()

_logger = logging.getLogger("ballot_relay.config")


def validate_settings(cfg: Settings) -> None:
    is_prod = cfg.environment.lower() in {"production", "prod"}

    if not cfg.signer_private_key:
        if is_prod:
            raise RuntimeError(
                "FATAL: SIGNER_PRIVATE_KEY is not set. "
                "Mint, delegate and vote requests need a signing key in production."
            )
        _logger.warning(
            "SIGNER_PRIVATE_KEY is not set; write endpoints will return error envelopes."
        )

    if cfg.confirmations < 1:
        raise RuntimeError("CONFIRMATIONS must be at least 1")

    if cfg.cors_origins == "*" and is_prod:
        raise RuntimeError(
            "FATAL: CORS_ORIGINS cannot be '*' in production. "
            "Set explicit trusted origins via the CORS_ORIGINS environment variable."
        )
