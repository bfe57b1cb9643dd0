"""Tests for ballot_relay.services.contract_gateway — reads, signed writes, confirmations."""

import httpx
import pytest
from eth_abi import decode
from eth_account import Account
from eth_utils import decode_hex, to_checksum_address

from ballot_relay.config import Settings
from ballot_relay.core.exceptions import (
    ConfirmationTimeoutError,
    RpcError,
    SignerNotConfiguredError,
    TransactionFailedError,
)
from ballot_relay.services.contract_gateway import ContractGateway
from ballot_relay.tests.conftest import (
    CHAIN_ID,
    RECIPIENT,
    SIGNER_ADDRESS,
    SIGNER_KEY,
    SPENDER,
    TOKEN_ADDRESS,
    TX_HASH,
)


class TestRead:
    async def test_total_supply(self, gateway, node):
        node.stub_call(gateway.token, "totalSupply", 10**21)
        assert await gateway.read(gateway.token, "totalSupply") == 10**21

    async def test_call_targets_contract_from_signer(self, gateway, node):
        node.stub_call(gateway.token, "allowance", 0)
        await gateway.read(gateway.token, "allowance", RECIPIENT, SPENDER)
        method, params = node.requests[-1]
        assert method == "eth_call"
        assert params[0]["to"] == to_checksum_address(TOKEN_ADDRESS)
        assert params[0]["from"] == SIGNER_ADDRESS
        assert params[1] == "latest"

    async def test_revert_raises_rpc_error(self, gateway, node):
        node.stub_revert(gateway.ballot, "winningProposal")
        with pytest.raises(RpcError, match="execution reverted"):
            await gateway.read(gateway.ballot, "winningProposal")

    async def test_chain_id_is_cached(self, gateway, node):
        gateway._chain_id = None
        assert await gateway.chain_id() == CHAIN_ID
        assert await gateway.chain_id() == CHAIN_ID
        assert node.methods_called().count("eth_chainId") == 1


class TestTransact:
    async def test_signs_and_submits(self, gateway, node):
        tx_hash = await gateway.transact(gateway.token, "mint", RECIPIENT, 5 * 10**18)

        assert tx_hash == TX_HASH
        assert len(node.raw_transactions) == 1
        raw = node.raw_transactions[0]
        assert Account.recover_transaction(raw) == SIGNER_ADDRESS

    async def test_calldata_carries_arguments(self, gateway, node):
        await gateway.transact(gateway.token, "mint", RECIPIENT, 7 * 10**18)
        estimate = next(p for m, p in node.requests if m == "eth_estimateGas")[0]
        assert estimate["from"] == SIGNER_ADDRESS
        assert estimate["data"].startswith("0x40c10f19")
        to, amount = decode(["address", "uint256"], decode_hex(estimate["data"])[4:])
        assert to == to_checksum_address(RECIPIENT)
        assert amount == 7 * 10**18

    async def test_build_sequence(self, gateway, node):
        await gateway.transact(gateway.token, "delegate", RECIPIENT)
        assert node.methods_called() == [
            "eth_getTransactionCount",
            "eth_estimateGas",
            "eth_gasPrice",
            "eth_sendRawTransaction",
        ]

    async def test_nonce_from_pending_count(self, gateway, node):
        await gateway.transact(gateway.token, "delegate", RECIPIENT)
        params = next(p for m, p in node.requests if m == "eth_getTransactionCount")
        assert params == [SIGNER_ADDRESS, "pending"]

    async def test_without_signer(self, gateway, node):
        gateway.signer = None
        with pytest.raises(SignerNotConfiguredError):
            await gateway.transact(gateway.token, "delegate", RECIPIENT)
        assert node.requests == []

    async def test_view_function_rejected(self, gateway):
        with pytest.raises(ValueError, match="read-only"):
            await gateway.transact(gateway.token, "totalSupply")

    async def test_submission_error_propagates(self, gateway, node):
        node.fail_method("eth_sendRawTransaction", "insufficient funds for gas * price + value")
        with pytest.raises(RpcError, match="insufficient funds"):
            await gateway.transact(gateway.token, "delegate", RECIPIENT)


class TestWaitForConfirmation:
    async def test_returns_mined_receipt(self, gateway, node):
        receipt = await gateway.wait_for_confirmation(TX_HASH)
        assert receipt["transactionHash"] == TX_HASH

    async def test_polls_until_mined(self, gateway, node):
        node.pending_polls = 3
        await gateway.wait_for_confirmation(TX_HASH)
        assert node.methods_called().count("eth_getTransactionReceipt") == 4

    async def test_reverted_receipt(self, gateway, node):
        node.receipt_status = "0x0"
        with pytest.raises(TransactionFailedError) as exc_info:
            await gateway.wait_for_confirmation(TX_HASH)
        assert exc_info.value.tx_hash == TX_HASH

    async def test_receipt_without_status_counts_as_mined(self, gateway, node):
        node.receipt_status = None
        receipt = await gateway.wait_for_confirmation(TX_HASH)
        assert receipt["transactionHash"] == TX_HASH

    async def test_timeout(self, gateway, node):
        node.pending_polls = 10**9
        gateway.receipt_timeout = 0
        with pytest.raises(ConfirmationTimeoutError):
            await gateway.wait_for_confirmation(TX_HASH)

    async def test_waits_for_confirmation_depth(self, gateway, node):
        gateway.confirmations = 3
        calls = {"n": 0}
        original = node._dispatch

        def advancing(method, params):
            # Mined at 100; the head advances one block per eth_blockNumber call.
            if method == "eth_blockNumber":
                calls["n"] += 1
                return hex(100 + calls["n"] - 1)
            if method == "eth_getTransactionReceipt":
                return {"transactionHash": params[0], "blockNumber": hex(100), "status": "0x1"}
            return original(method, params)

        node._dispatch = advancing
        await gateway.wait_for_confirmation(TX_HASH)
        assert calls["n"] == 3

    async def test_send_and_wait(self, gateway, node):
        receipt = await gateway.send_and_wait(gateway.ballot, "vote", 1, 10**18)
        assert receipt["transactionHash"] == TX_HASH
        assert "eth_getTransactionReceipt" in node.methods_called()


class TestFromSettings:
    async def test_builds_signer_and_contracts(self):
        cfg = Settings(
            _env_file=None,
            signer_private_key=SIGNER_KEY,
            rpc_url="http://node.test",
            chain_id=11155111,
            confirmations=2,
        )
        gw = ContractGateway.from_settings(cfg, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        assert gw.signer_address == SIGNER_ADDRESS
        assert gw.token.address == to_checksum_address(cfg.my_token_contract_address)
        assert gw.ballot.address == to_checksum_address(cfg.tokenized_ballot_contract_address)
        assert await gw.chain_id() == 11155111
        assert gw.confirmations == 2
        await gw.aclose()

    async def test_read_only_without_key(self):
        cfg = Settings(_env_file=None, signer_private_key="", rpc_url="http://node.test")
        gw = ContractGateway.from_settings(cfg)
        assert gw.signer is None
        assert gw.signer_address is None
        await gw.aclose()
