"""Shared test fixtures for the relay test suite.

The Ethereum node is replaced by ``FakeNode``, a JSON-RPC handler plugged
into ``httpx.MockTransport``. Contract reads are answered from per-selector
stubs encoded with eth-abi, and writes are signed for real with a throwaway
development key.
"""

import json
from typing import Any

import httpx
import pytest
from eth_abi import encode
from eth_account import Account
from eth_utils import encode_hex
from httpx import ASGITransport, AsyncClient

from ballot_relay.core.abi import Contract
from ballot_relay.core.contracts_abi import MY_TOKEN_ABI, TOKENIZED_BALLOT_ABI
from ballot_relay.services.contract_gateway import ContractGateway
from ballot_relay.services.rpc_client import RpcClient

# Well-known local development key (never funded on a public network)
SIGNER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SIGNER_ADDRESS = Account.from_key(SIGNER_KEY).address

TOKEN_ADDRESS = "0x9a750a01629649975dc1f4e608ab203016f55180"
BALLOT_ADDRESS = "0xd7b7419e9fac3d687a206e0656ec7938049aa9e2"
RECIPIENT = "0xfcc5fb101131630bd2154a7f0bcdc433159325c6"
SPENDER = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"

TX_HASH = "0x" + "ab" * 32
CHAIN_ID = 5


class FakeNode:
    """In-memory JSON-RPC node answering the methods the gateway uses."""

    def __init__(self):
        self.requests: list[tuple[str, list[Any]]] = []
        self.call_results: dict[str, Any] = {}
        self.method_errors: dict[str, dict[str, Any]] = {}
        self.transactions: dict[str, dict[str, Any]] = {}
        self.raw_transactions: list[str] = []
        self.block_number = 100
        self.pending_polls = 0
        self.receipt_status = "0x1"
        self.tx_hash = TX_HASH

    # --- Stubbing helpers ---

    def stub_call(self, contract: Contract, fn_name: str, *values: Any) -> None:
        fn = contract.function(fn_name)
        self.call_results[encode_hex(fn.selector)] = encode_hex(encode(fn.output_types, list(values)))

    def stub_revert(self, contract: Contract, fn_name: str, reason: str = "execution reverted") -> None:
        fn = contract.function(fn_name)
        self.call_results[encode_hex(fn.selector)] = {"code": 3, "message": reason, "data": "0x"}

    def fail_method(self, method: str, message: str, code: int = -32000) -> None:
        self.method_errors[method] = {"code": code, "message": message}

    def methods_called(self) -> list[str]:
        return [method for method, _ in self.requests]

    # --- Transport ---

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method, params = payload["method"], payload["params"]
        self.requests.append((method, params))

        error = self.method_errors.get(method)
        if error is None:
            result = self._dispatch(method, params)
            if isinstance(result, dict) and "code" in result and method == "eth_call":
                error = result
        if error is not None:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "error": error})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    def _dispatch(self, method: str, params: list[Any]) -> Any:
        if method == "eth_chainId":
            return hex(CHAIN_ID)
        if method == "eth_blockNumber":
            return hex(self.block_number)
        if method == "eth_gasPrice":
            return hex(1_000_000_000)
        if method == "eth_estimateGas":
            return hex(60_000)
        if method == "eth_getTransactionCount":
            return hex(len(self.raw_transactions))
        if method == "eth_call":
            selector = params[0]["data"][:10]
            if selector not in self.call_results:
                return {"code": 3, "message": "execution reverted", "data": "0x"}
            return self.call_results[selector]
        if method == "eth_sendRawTransaction":
            self.raw_transactions.append(params[0])
            return self.tx_hash
        if method == "eth_getTransactionReceipt":
            if self.pending_polls > 0:
                self.pending_polls -= 1
                return None
            return {
                "transactionHash": params[0],
                "blockNumber": hex(self.block_number),
                "status": self.receipt_status,
            }
        if method == "eth_getTransactionByHash":
            return self.transactions.get(params[0])
        raise AssertionError(f"Unexpected RPC method {method}")


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
async def gateway(node):
    """ContractGateway wired to the fake node with a real signing key."""
    rpc = RpcClient("http://node.test", transport=httpx.MockTransport(node.handler))
    gw = ContractGateway(
        rpc=rpc,
        token=Contract(TOKEN_ADDRESS, MY_TOKEN_ABI),
        ballot=Contract(BALLOT_ADDRESS, TOKENIZED_BALLOT_ABI),
        signer=Account.from_key(SIGNER_KEY),
        chain_id=CHAIN_ID,
        poll_interval=0,
        receipt_timeout=1.0,
    )
    yield gw
    await gw.aclose()


@pytest.fixture
async def async_client(gateway):
    """httpx AsyncClient wired to the FastAPI app with the fake-node gateway."""
    from ballot_relay.api.deps import get_gateway
    from ballot_relay.main import app

    app.dependency_overrides[get_gateway] = lambda: gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
