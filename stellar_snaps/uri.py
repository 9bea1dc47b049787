"""Construction and parsing of SEP-0007 ``web+stellar:`` URIs."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import parse_qsl, quote

from .constants import (
    DEFAULT_URI_NETWORK,
    MAX_MESSAGE_LENGTH,
    NATIVE_ASSET_CODE,
    NETWORK_PASSPHRASES,
    URI_SCHEME,
)
from .errors import (
    InvalidAddress,
    InvalidAmount,
    InvalidAsset,
    InvalidOperation,
    InvalidUri,
    MessageTooLong,
    MissingParameter,
    MissingXdr,
)
from .models.uri import ParsedSnap
from .validation import is_valid_amount, is_valid_stellar_address

CALLBACK_PREFIX = "url:"
OPERATIONS = ("pay", "tx")

# Characters encodeURIComponent leaves alone, beyond quote()'s own safe set.
_URI_COMPONENT_SAFE = "!*'()"

_PAY_FIELDS = {
    "destination": "destination",
    "amount": "amount",
    "asset_code": "asset_code",
    "asset_issuer": "asset_issuer",
    "memo": "memo",
    "memo_type": "memo_type",
    "msg": "message",
    "network_passphrase": "network_passphrase",
    "callback": "callback",
}
_TX_FIELDS = {
    "xdr": "xdr",
    "msg": "message",
    "network_passphrase": "network_passphrase",
    "callback": "callback",
    "pubkey": "pubkey",
}


@dataclass
class SnapUriResult:
    uri: str
    params: dict[str, str] = field(default_factory=dict)


def encode_uri_component(value: str) -> str:
    """Percent-encode a query value the way browsers' encodeURIComponent does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _build_uri(operation: str, params: dict[str, str]) -> str:
    query = "&".join(f"{key}={encode_uri_component(value)}" for key, value in params.items())
    return f"{URI_SCHEME}{operation}?{query}"


def _network_passphrase(network: str) -> str | None:
    """Passphrase to embed, or None for the implicit public network."""
    if network == DEFAULT_URI_NETWORK:
        return None
    try:
        return NETWORK_PASSPHRASES[network]
    except KeyError:
        raise InvalidUri(f"Unknown network: {network}") from None


def _check_message(message: str | None) -> None:
    if message and len(message) > MAX_MESSAGE_LENGTH:
        raise MessageTooLong(MAX_MESSAGE_LENGTH)


def create_payment_snap(
    *,
    destination: str,
    amount: str | None = None,
    asset_code: str | None = None,
    asset_issuer: str | None = None,
    memo: str | None = None,
    memo_type: str | None = None,
    message: str | None = None,
    network: str = DEFAULT_URI_NETWORK,
    callback: str | None = None,
) -> SnapUriResult:
    """
    Build a ``web+stellar:pay`` URI.

    Checks run in a fixed order: destination, amount, asset, message length.
    The network passphrase is only written for non-public networks.
    """
    if not is_valid_stellar_address(destination):
        raise InvalidAddress(destination, label="destination")

    if amount is not None and not is_valid_amount(amount):
        raise InvalidAmount(amount)

    if asset_code and asset_code.upper() != NATIVE_ASSET_CODE and not asset_issuer:
        raise InvalidAsset("asset_issuer required for non-XLM assets")

    _check_message(message)
    passphrase = _network_passphrase(network)

    params: dict[str, str] = {"destination": destination}
    if amount:
        params["amount"] = amount
    if asset_code:
        params["asset_code"] = asset_code
    if asset_issuer:
        params["asset_issuer"] = asset_issuer
    if memo:
        params["memo"] = memo
    if memo_type:
        params["memo_type"] = memo_type
    if message:
        params["msg"] = message
    if passphrase:
        params["network_passphrase"] = passphrase
    if callback:
        params["callback"] = f"{CALLBACK_PREFIX}{callback}"

    return SnapUriResult(uri=_build_uri("pay", params), params=params)


def create_transaction_snap(
    *,
    xdr: str,
    network: str = DEFAULT_URI_NETWORK,
    message: str | None = None,
    callback: str | None = None,
    pubkey: str | None = None,
) -> SnapUriResult:
    """
    Build a ``web+stellar:tx`` URI for signing an arbitrary transaction.

    ``pubkey`` is passed through as given; it is not validated as an address.
    """
    if not xdr or not isinstance(xdr, str):
        raise MissingXdr()

    _check_message(message)
    passphrase = _network_passphrase(network)

    params: dict[str, str] = {"xdr": xdr}
    if passphrase:
        params["network_passphrase"] = passphrase
    if message:
        params["msg"] = message
    if callback:
        params["callback"] = f"{CALLBACK_PREFIX}{callback}"
    if pubkey:
        params["pubkey"] = pubkey

    return SnapUriResult(uri=_build_uri("tx", params), params=params)


def parse_snap_uri(uri: str) -> ParsedSnap:
    """Decode a ``web+stellar:`` URI into a :class:`ParsedSnap`."""
    if not isinstance(uri, str) or not uri.startswith(URI_SCHEME):
        raise InvalidUri("Invalid SEP-0007 URI: must start with web+stellar:")

    operation, _, query = uri[len(URI_SCHEME) :].partition("?")
    if operation not in OPERATIONS:
        raise InvalidOperation(f"Invalid operation: {operation}")

    raw: dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        raw.setdefault(key, value)

    fields = _PAY_FIELDS if operation == "pay" else _TX_FIELDS
    values: dict[str, str] = {}
    for key, attr in fields.items():
        value = raw.get(key)
        if value:
            values[attr] = value

    callback = values.get("callback")
    if callback and callback.startswith(CALLBACK_PREFIX):
        values["callback"] = callback[len(CALLBACK_PREFIX) :]

    required = "destination" if operation == "pay" else "xdr"
    if required not in values:
        raise MissingParameter(required)

    return ParsedSnap(kind=operation, **values)
