"""Exception hierarchy for stellar-snaps.

Every error carries a stable ``code`` string for programmatic handling.
"""

from __future__ import annotations


class StellarSnapError(Exception):
    """Base error for the package."""

    code = "STELLAR_SNAP_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class InvalidAddress(StellarSnapError):
    code = "INVALID_ADDRESS"

    def __init__(self, address: str, label: str = "Stellar"):
        self.address = address
        super().__init__(f"Invalid {label} address: {address}")


class InvalidAmount(StellarSnapError):
    code = "INVALID_AMOUNT"

    def __init__(self, amount: str):
        self.amount = amount
        super().__init__(f"Invalid amount: {amount}. Must be a positive number.")


class InvalidAsset(StellarSnapError):
    code = "INVALID_ASSET"


class InvalidUri(StellarSnapError):
    code = "INVALID_URI"


class InvalidOperation(InvalidUri):
    code = "INVALID_OPERATION"


class MissingParameter(InvalidUri):
    code = "MISSING_PARAMETER"

    def __init__(self, name: str):
        self.parameter = name
        super().__init__(f"Missing required parameter: {name}")


class MissingXdr(InvalidUri):
    code = "MISSING_XDR"

    def __init__(self):
        super().__init__("XDR is required for transaction snaps")


class MessageTooLong(InvalidUri):
    code = "MESSAGE_TOO_LONG"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Message cannot exceed {limit} characters")


class InvalidDiscoveryFile(StellarSnapError):
    code = "INVALID_DISCOVERY_FILE"


class SnapNotFound(StellarSnapError):
    code = "SNAP_NOT_FOUND"

    def __init__(self, snap_id: str):
        self.snap_id = snap_id
        super().__init__(f"Snap not found: {snap_id}")


class SnapUnauthorized(StellarSnapError):
    code = "SNAP_UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class SnapApiError(StellarSnapError):
    code = "SNAP_API_ERROR"

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


# Payment flow


class WalletNotConnected(StellarSnapError):
    code = "WALLET_NOT_CONNECTED"


class WrongNetwork(StellarSnapError):
    code = "WRONG_NETWORK"

    def __init__(self, expected: str):
        self.expected = expected
        super().__init__(f"Switch your wallet to {expected}")


class AccountNotFunded(StellarSnapError):
    code = "ACCOUNT_NOT_FUNDED"

    def __init__(self, address: str):
        self.address = address
        super().__init__("Account not funded")


class PaymentFailed(StellarSnapError):
    code = "PAYMENT_FAILED"


class Cancelled(StellarSnapError):
    """The user declined to sign. Informational, not a failure."""

    code = "CANCELLED"

    def __init__(self, message: str = "Transaction cancelled"):
        super().__init__(message)


# Wallet bridge


class BridgeNotReady(StellarSnapError):
    code = "BRIDGE_NOT_READY"

    def __init__(self):
        super().__init__("Wallet bridge not ready. Please refresh the page.")


class BridgeTimeout(StellarSnapError):
    code = "BRIDGE_TIMEOUT"

    def __init__(self, method: str, timeout: float):
        self.method = method
        self.timeout = timeout
        super().__init__(f"Wallet request {method} timed out after {timeout:g}s")


class BridgeError(StellarSnapError):
    """The wallet side answered a request with an error string."""

    code = "BRIDGE_ERROR"
