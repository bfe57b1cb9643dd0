"""Contract gateway — token and ballot handles bound to a provider and signer.

Reads go through ``eth_call``. Writes are built, signed locally with
eth-account and submitted as raw transactions, then polled until the
configured number of confirmations is reached.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import encode_hex

from ballot_relay.config import Settings
from ballot_relay.core.abi import Contract
from ballot_relay.core.contracts_abi import MY_TOKEN_ABI, TOKENIZED_BALLOT_ABI
from ballot_relay.core.exceptions import (
    ConfirmationTimeoutError,
    SignerNotConfiguredError,
    TransactionFailedError,
)
from ballot_relay.services.rpc_client import RpcClient

logger = logging.getLogger(__name__)


class ContractGateway:
    """Shared access to the two deployed contracts.

    The provider (``rpc``) and the optional ``signer`` are passed in
    explicitly; the gateway holds no other state apart from a cached chain id.
    """

    def __init__(
        self,
        rpc: RpcClient,
        token: Contract,
        ballot: Contract,
        signer: LocalAccount | None = None,
        chain_id: int | None = None,
        confirmations: int = 1,
        poll_interval: float = 2.0,
        receipt_timeout: float = 120.0,
    ):
        self.rpc = rpc
        self.token = token
        self.ballot = ballot
        self.signer = signer
        self.confirmations = confirmations
        self.poll_interval = poll_interval
        self.receipt_timeout = receipt_timeout
        self._chain_id = chain_id

    @classmethod
    def from_settings(
        cls,
        cfg: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ContractGateway:
        signer = Account.from_key(cfg.signer_private_key) if cfg.signer_private_key else None
        return cls(
            rpc=RpcClient(cfg.resolved_rpc_url, timeout=cfg.rpc_timeout_seconds, transport=transport),
            token=Contract(cfg.my_token_contract_address, MY_TOKEN_ABI),
            ballot=Contract(cfg.tokenized_ballot_contract_address, TOKENIZED_BALLOT_ABI),
            signer=signer,
            chain_id=cfg.chain_id,
            confirmations=cfg.confirmations,
            poll_interval=cfg.receipt_poll_interval_seconds,
            receipt_timeout=cfg.receipt_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self.rpc.aclose()

    @property
    def signer_address(self) -> str | None:
        return self.signer.address if self.signer else None

    async def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = await self.rpc.chain_id()
        return self._chain_id

    # --- Reads ---

    async def read(self, contract: Contract, fn_name: str, *args: Any) -> Any:
        fn = contract.function(fn_name)
        call = {"to": contract.address, "data": fn.encode_call(*args)}
        if self.signer:
            call["from"] = self.signer.address
        return fn.decode_output(await self.rpc.call(call))

    async def get_transaction(self, tx_hash: str) -> dict[str, Any] | None:
        return await self.rpc.get_transaction(tx_hash)

    # --- Writes ---

    async def transact(self, contract: Contract, fn_name: str, *args: Any) -> str:
        """Sign and submit a state-changing call. Returns the transaction hash."""
        if self.signer is None:
            raise SignerNotConfiguredError()

        fn = contract.function(fn_name)
        if not fn.mutates:
            raise ValueError(f"{fn.signature} is read-only; use read() instead")

        data = fn.encode_call(*args)
        sender = self.signer.address
        nonce = await self.rpc.get_transaction_count(sender, "pending")
        gas = await self.rpc.estimate_gas({"from": sender, "to": contract.address, "data": data})
        tx = {
            "to": contract.address,
            "data": data,
            "value": 0,
            "nonce": nonce,
            "gas": gas,
            "gasPrice": await self.rpc.gas_price(),
            "chainId": await self.chain_id(),
        }
        signed = self.signer.sign_transaction(tx)
        tx_hash = await self.rpc.send_raw_transaction(encode_hex(signed.raw_transaction))
        logger.info(f"Submitted {fn.signature} to {contract.address} (nonce={nonce}): {tx_hash}")
        return tx_hash

    async def wait_for_confirmation(self, tx_hash: str) -> dict[str, Any]:
        """Poll until ``tx_hash`` is mined with enough confirmations.

        Raises TransactionFailedError for a reverted receipt and
        ConfirmationTimeoutError once ``receipt_timeout`` has elapsed.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.receipt_timeout

        while True:
            receipt = await self.rpc.get_transaction_receipt(tx_hash)
            if receipt and receipt.get("blockNumber"):
                # pre-Byzantium receipts carry no status
                if int(receipt.get("status") or "0x1", 16) == 0:
                    raise TransactionFailedError(tx_hash, receipt)
                mined_in = int(receipt["blockNumber"], 16)
                if self.confirmations <= 1:
                    return receipt
                depth = await self.rpc.block_number() - mined_in + 1
                if depth >= self.confirmations:
                    return receipt

            if loop.time() >= deadline:
                raise ConfirmationTimeoutError(tx_hash, self.receipt_timeout)
            await asyncio.sleep(self.poll_interval)

    async def send_and_wait(self, contract: Contract, fn_name: str, *args: Any) -> dict[str, Any]:
        tx_hash = await self.transact(contract, fn_name, *args)
        receipt = await self.wait_for_confirmation(tx_hash)
        logger.info(f"Confirmed {tx_hash} in block {int(receipt['blockNumber'], 16)}")
        return receipt
