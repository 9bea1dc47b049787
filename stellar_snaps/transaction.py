"""Payment transaction building with the Stellar SDK."""

from __future__ import annotations

from stellar_sdk import Account, Asset, TransactionBuilder

from .constants import NATIVE_ASSET_CODE, NETWORK_PASSPHRASES
from .errors import InvalidAddress, InvalidAmount, InvalidAsset, StellarSnapError
from .validation import is_valid_amount, is_valid_asset_code, is_valid_stellar_address

BASE_FEE = 100
DEFAULT_TX_TIMEOUT_SECONDS = 180


def create_asset(code: str | None, issuer: str | None = None) -> Asset:
    """Native XLM for an empty or ``XLM`` code, otherwise an issued asset."""
    if not code or code.upper() == NATIVE_ASSET_CODE:
        return Asset.native()
    if not is_valid_asset_code(code):
        raise InvalidAsset(f"Invalid asset code: {code}")
    if not issuer:
        raise InvalidAsset(f"Asset issuer is required for non-XLM asset: {code}")
    if not is_valid_stellar_address(issuer):
        raise InvalidAsset(f"Invalid asset issuer address: {issuer}")
    try:
        return Asset(code, issuer)
    except ValueError as e:
        raise InvalidAsset(f"Invalid asset {code}:{issuer}: {e}") from e


def _add_memo(builder: TransactionBuilder, memo: str, memo_type: str | None) -> None:
    try:
        if memo_type == "MEMO_ID":
            builder.add_id_memo(int(memo))
        elif memo_type == "MEMO_HASH":
            builder.add_hash_memo(memo)
        elif memo_type == "MEMO_RETURN":
            builder.add_return_hash_memo(memo)
        else:
            builder.add_text_memo(memo)
    except ValueError as e:
        raise StellarSnapError(f"Invalid memo: {e}", code="INVALID_MEMO") from e


def build_payment_transaction(
    *,
    source: str,
    sequence: str | int,
    destination: str,
    amount: str,
    asset_code: str | None = None,
    asset_issuer: str | None = None,
    memo: str | None = None,
    memo_type: str | None = None,
    network: str = "testnet",
    timeout: int = DEFAULT_TX_TIMEOUT_SECONDS,
) -> str:
    """
    Build an unsigned single-payment transaction and return its XDR.

    ``sequence`` is the account's current sequence number, as Horizon reports
    it; the built transaction uses the next one.
    """
    if not is_valid_stellar_address(source):
        raise InvalidAddress(source, label="source")
    if not is_valid_stellar_address(destination):
        raise InvalidAddress(destination, label="destination")
    if not is_valid_amount(amount):
        raise InvalidAmount(amount)

    passphrase = NETWORK_PASSPHRASES.get(network)
    if passphrase is None:
        raise StellarSnapError(f"Invalid network: {network}", code="INVALID_NETWORK")

    try:
        sequence = int(sequence)
    except (TypeError, ValueError) as e:
        raise StellarSnapError(f"Invalid sequence: {sequence}", code="INVALID_SEQUENCE") from e

    asset = create_asset(asset_code, asset_issuer)
    try:
        # The SDK also checks strkey checksums, which the address predicate does not.
        account = Account(source, sequence)
        builder = TransactionBuilder(source_account=account, network_passphrase=passphrase, base_fee=BASE_FEE)
        builder.append_payment_op(destination=destination, asset=asset, amount=amount)
    except ValueError as e:
        raise StellarSnapError(f"Invalid transaction: {e}", code="INVALID_TRANSACTION") from e
    if memo:
        _add_memo(builder, memo, memo_type)
    builder.set_timeout(timeout)
    return builder.build().to_xdr()
