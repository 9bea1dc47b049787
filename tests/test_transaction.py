"""Tests for payment transaction building."""

import pytest
from stellar_sdk import Asset, Keypair, TransactionEnvelope

from stellar_snaps.constants import NETWORK_PASSPHRASES
from stellar_snaps.errors import InvalidAddress, InvalidAmount, InvalidAsset, StellarSnapError
from stellar_snaps.transaction import BASE_FEE, build_payment_transaction, create_asset


@pytest.fixture
def source() -> str:
    return Keypair.random().public_key


@pytest.fixture
def destination() -> str:
    return Keypair.random().public_key


def _decode(xdr: str, network: str = "testnet"):
    return TransactionEnvelope.from_xdr(xdr, NETWORK_PASSPHRASES[network]).transaction


def test_create_asset_native_and_issued():
    issuer = Keypair.random().public_key

    assert create_asset(None).is_native()
    assert create_asset("xlm").is_native()
    assert create_asset("USDC", issuer) == Asset("USDC", issuer)


def test_create_asset_rejects_bad_input():
    with pytest.raises(InvalidAsset):
        create_asset("USDC")
    with pytest.raises(InvalidAsset):
        create_asset("TOO-LONG-CODE!", Keypair.random().public_key)
    with pytest.raises(InvalidAsset):
        create_asset("USDC", "GNOTANADDRESS")


def test_build_native_payment(source, destination):
    xdr = build_payment_transaction(source=source, sequence="100", destination=destination, amount="12.5")
    tx = _decode(xdr)

    assert tx.source_account.account_id == source
    assert tx.sequence == 101
    assert tx.fee == BASE_FEE
    assert len(tx.operations) == 1
    payment = tx.operations[0]
    assert payment.destination.account_id == destination
    assert payment.asset.is_native()
    assert str(payment.amount) == "12.5"
    assert tx.preconditions.time_bounds.max_time > 0


def test_build_payment_with_issued_asset_and_memo(source, destination):
    issuer = Keypair.random().public_key

    xdr = build_payment_transaction(
        source=source,
        sequence=7,
        destination=destination,
        amount="1",
        asset_code="USDC",
        asset_issuer=issuer,
        memo="order-42",
        memo_type="MEMO_TEXT",
        network="public",
    )
    tx = _decode(xdr, "public")

    assert tx.operations[0].asset == Asset("USDC", issuer)
    assert tx.memo.memo_text == b"order-42"


def test_build_payment_with_id_memo(source, destination):
    xdr = build_payment_transaction(
        source=source, sequence="1", destination=destination, amount="1", memo="12345", memo_type="MEMO_ID"
    )

    assert _decode(xdr).memo.memo_id == 12345


def test_build_rejects_invalid_input(source, destination):
    with pytest.raises(InvalidAddress):
        build_payment_transaction(source="nope", sequence="1", destination=destination, amount="1")
    with pytest.raises(InvalidAddress):
        build_payment_transaction(source=source, sequence="1", destination="nope", amount="1")
    with pytest.raises(InvalidAmount):
        build_payment_transaction(source=source, sequence="1", destination=destination, amount="0")


def test_build_rejects_unknown_network_and_bad_sequence(source, destination):
    with pytest.raises(StellarSnapError) as exc_info:
        build_payment_transaction(source=source, sequence="1", destination=destination, amount="1", network="moon")
    assert exc_info.value.code == "INVALID_NETWORK"

    with pytest.raises(StellarSnapError) as exc_info:
        build_payment_transaction(source=source, sequence="abc", destination=destination, amount="1")
    assert exc_info.value.code == "INVALID_SEQUENCE"


def test_build_rejects_bad_memo(source, destination):
    with pytest.raises(StellarSnapError) as exc_info:
        build_payment_transaction(
            source=source, sequence="1", destination=destination, amount="1", memo="x" * 40, memo_type="MEMO_TEXT"
        )
    assert exc_info.value.code == "INVALID_MEMO"


def test_build_rejects_bad_checksum(destination):
    # Passes the structural check, fails the SDK's strkey checksum.
    bad_source = "G" + "A" * 55

    with pytest.raises(StellarSnapError) as exc_info:
        build_payment_transaction(source=bad_source, sequence="1", destination=destination, amount="1")
    assert exc_info.value.code == "INVALID_TRANSACTION"
