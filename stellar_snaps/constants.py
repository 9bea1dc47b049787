"""Network constants shared across the codec, pipeline and payment flow."""

from __future__ import annotations

URI_SCHEME = "web+stellar:"

NETWORK_PASSPHRASES: dict[str, str] = {
    "public": "Public Global Stellar Network ; September 2015",
    "testnet": "Test SDF Network ; September 2015",
}

HORIZON_URLS: dict[str, str] = {
    "public": "https://horizon.stellar.org",
    "testnet": "https://horizon-testnet.stellar.org",
}

# Networks whose passphrase is implied when a URI omits network_passphrase.
DEFAULT_URI_NETWORK = "public"

MEMO_TYPES = ("MEMO_TEXT", "MEMO_ID", "MEMO_HASH", "MEMO_RETURN")

NATIVE_ASSET_CODE = "XLM"

MAX_MESSAGE_LENGTH = 300

DISCOVERY_FILE_PATH = "/.well-known/stellar-snap.json"

DEFAULT_SERVICE_DOMAIN = "stellar-snaps.vercel.app"
DEFAULT_BASE_URL = f"https://{DEFAULT_SERVICE_DOMAIN}"


def network_for_passphrase(passphrase: str | None) -> str | None:
    """Map a network passphrase back to its short name (None when unknown)."""
    if not passphrase:
        return DEFAULT_URI_NETWORK
    for name, value in NETWORK_PASSPHRASES.items():
        if value == passphrase:
            return name
    return None
