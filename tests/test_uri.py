"""Tests for building and parsing web+stellar: URIs."""

import pytest

from stellar_snaps.constants import NETWORK_PASSPHRASES
from stellar_snaps.errors import (
    InvalidAddress,
    InvalidAmount,
    InvalidAsset,
    InvalidOperation,
    InvalidUri,
    MessageTooLong,
    MissingParameter,
    MissingXdr,
)
from stellar_snaps.uri import create_payment_snap, create_transaction_snap, encode_uri_component, parse_snap_uri

DESTINATION = "GBZXN7PIRZGNMHGA7MUUUF4GWPY5AYPV6LY4UV2GL6VJGIQRXFDNMADI"
ISSUER = "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN"


def test_payment_snap_minimal_public_omits_passphrase():
    result = create_payment_snap(destination=DESTINATION)

    assert result.uri == f"web+stellar:pay?destination={DESTINATION}"
    assert result.params == {"destination": DESTINATION}


def test_payment_snap_params_in_fixed_order():
    result = create_payment_snap(
        destination=DESTINATION,
        amount="10",
        asset_code="USDC",
        asset_issuer=ISSUER,
        memo="order-1",
        memo_type="MEMO_TEXT",
        message="Thanks!",
        network="testnet",
        callback="https://example.com/cb",
    )

    assert list(result.params) == [
        "destination",
        "amount",
        "asset_code",
        "asset_issuer",
        "memo",
        "memo_type",
        "msg",
        "network_passphrase",
        "callback",
    ]
    assert result.params["network_passphrase"] == NETWORK_PASSPHRASES["testnet"]
    assert result.params["callback"] == "url:https://example.com/cb"
    assert "network_passphrase=Test%20SDF%20Network%20%3B%20September%202015" in result.uri
    assert "callback=url%3Ahttps%3A%2F%2Fexample.com%2Fcb" in result.uri


def test_encode_uri_component_matches_browser_encoding():
    assert encode_uri_component("a b&c=d/e") == "a%20b%26c%3Dd%2Fe"
    assert encode_uri_component("it's (ok)!*") == "it's%20(ok)!*"
    assert encode_uri_component("-_.~") == "-_.~"


def test_payment_snap_validation_order():
    # Destination is checked before everything else.
    with pytest.raises(InvalidAddress):
        create_payment_snap(destination="nope", amount="-1", asset_code="USDC", message="x" * 301)
    with pytest.raises(InvalidAmount):
        create_payment_snap(destination=DESTINATION, amount="-1", asset_code="USDC", message="x" * 301)
    with pytest.raises(InvalidAsset):
        create_payment_snap(destination=DESTINATION, asset_code="USDC", message="x" * 301)
    with pytest.raises(MessageTooLong):
        create_payment_snap(destination=DESTINATION, message="x" * 301)


def test_payment_snap_message_limit_is_inclusive():
    result = create_payment_snap(destination=DESTINATION, message="x" * 300)
    assert result.params["msg"] == "x" * 300


def test_payment_snap_native_asset_needs_no_issuer():
    result = create_payment_snap(destination=DESTINATION, asset_code="XLM")
    assert result.params["asset_code"] == "XLM"
    assert "asset_issuer" not in result.params


def test_payment_snap_unknown_network():
    with pytest.raises(InvalidUri):
        create_payment_snap(destination=DESTINATION, network="futurenet")


def test_error_codes_are_stable():
    with pytest.raises(InvalidAddress) as exc_info:
        create_payment_snap(destination="nope")
    assert exc_info.value.code == "INVALID_ADDRESS"


def test_transaction_snap_requires_xdr():
    with pytest.raises(MissingXdr):
        create_transaction_snap(xdr="")


def test_transaction_snap_param_order_and_unvalidated_pubkey():
    result = create_transaction_snap(
        xdr="AAAA+/==",
        network="testnet",
        message="Sign me",
        callback="https://example.com/cb",
        pubkey="not-an-address",
    )

    assert list(result.params) == ["xdr", "network_passphrase", "msg", "callback", "pubkey"]
    assert result.params["pubkey"] == "not-an-address"
    assert result.uri.startswith("web+stellar:tx?xdr=AAAA%2B%2F%3D%3D&")


def test_parse_payment_uri_recovers_fields():
    built = create_payment_snap(
        destination=DESTINATION,
        amount="2.5",
        memo="hello world",
        message="café & more",
        network="testnet",
        callback="https://example.com/cb?x=1",
    )

    parsed = parse_snap_uri(built.uri)

    assert parsed.kind == "pay"
    assert parsed.destination == DESTINATION
    assert parsed.amount == "2.5"
    assert parsed.memo == "hello world"
    assert parsed.message == "café & more"
    assert parsed.network_passphrase == NETWORK_PASSPHRASES["testnet"]
    assert parsed.network == "testnet"
    assert parsed.callback == "https://example.com/cb?x=1"


def test_parse_absent_passphrase_means_public():
    parsed = parse_snap_uri(f"web+stellar:pay?destination={DESTINATION}")
    assert parsed.network_passphrase is None
    assert parsed.network == "public"


def test_parse_first_occurrence_wins():
    parsed = parse_snap_uri(f"web+stellar:pay?destination={DESTINATION}&amount=1&amount=2")
    assert parsed.amount == "1"


def test_parse_ignores_fields_of_other_operation():
    parsed = parse_snap_uri(f"web+stellar:pay?destination={DESTINATION}&xdr=AAAA&pubkey=G")
    assert parsed.xdr is None
    assert parsed.pubkey is None


def test_parse_transaction_uri():
    parsed = parse_snap_uri("web+stellar:tx?xdr=AAAA%2B%2F%3D%3D&pubkey=GABC&callback=url%3Ahttps%3A%2F%2Fa.b")

    assert parsed.kind == "tx"
    assert parsed.xdr == "AAAA+/=="
    assert parsed.pubkey == "GABC"
    assert parsed.callback == "https://a.b"
    assert parsed.destination is None


@pytest.mark.parametrize(
    "uri, error",
    [
        ("https://example.com", InvalidUri),
        ("web+stellar:", InvalidOperation),
        ("web+stellar:send?destination=G", InvalidOperation),
        ("web+stellar:pay?amount=1", MissingParameter),
        ("web+stellar:pay?destination=", MissingParameter),
        ("web+stellar:tx?msg=hi", MissingParameter),
    ],
)
def test_parse_rejects_invalid_uris(uri, error):
    with pytest.raises(error):
        parse_snap_uri(uri)
