from typing import Any


class RpcError(Exception):
    """Raised when the JSON-RPC node returns an error or cannot be reached."""

    def __init__(self, message: str, code: int | None = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": self.data}


class SignerNotConfiguredError(RuntimeError):
    def __init__(self):
        super().__init__("No signing key configured; set SIGNER_PRIVATE_KEY to enable writes")


class TransactionFailedError(RuntimeError):
    def __init__(self, tx_hash: str, receipt: dict):
        super().__init__(f"Transaction {tx_hash} reverted in block {receipt.get('blockNumber')}")
        self.tx_hash = tx_hash
        self.receipt = receipt


class ConfirmationTimeoutError(TimeoutError):
    def __init__(self, tx_hash: str, timeout: float):
        super().__init__(f"Transaction {tx_hash} not confirmed within {timeout:g}s")
        self.tx_hash = tx_hash
        self.timeout = timeout

