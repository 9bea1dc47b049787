"""Tests for address, asset code and amount predicates."""

import pytest

from stellar_snaps.validation import is_valid_amount, is_valid_asset_code, is_valid_stellar_address

DESTINATION = "GBZXN7PIRZGNMHGA7MUUUF4GWPY5AYPV6LY4UV2GL6VJGIQRXFDNMADI"


def test_stellar_address_accepts_56_char_g_key():
    assert is_valid_stellar_address(DESTINATION) is True


@pytest.mark.parametrize(
    "address",
    [
        "",
        None,
        42,
        DESTINATION[:-1],
        DESTINATION + "A",
        "S" + DESTINATION[1:],
        "g" + DESTINATION[1:],
    ],
)
def test_stellar_address_rejects_malformed(address):
    assert is_valid_stellar_address(address) is False


@pytest.mark.parametrize("code", ["XLM", "USDC", "A", "ABCDEFGHIJKL", "usd1"])
def test_asset_code_accepts_alphanumeric_up_to_12(code):
    assert is_valid_asset_code(code) is True


@pytest.mark.parametrize("code", ["", None, "ABCDEFGHIJKLM", "US-D", "US D", "€UR"])
def test_asset_code_rejects_invalid(code):
    assert is_valid_asset_code(code) is False


@pytest.mark.parametrize("amount", ["1", "0.5", "10.0000001", "1e3", " 2 "])
def test_amount_accepts_positive_decimals(amount):
    assert is_valid_amount(amount) is True


@pytest.mark.parametrize("amount", ["", "   ", "0", "-1", "abc", "inf", "nan", "1_000", None, 5])
def test_amount_rejects_non_positive_or_unparseable(amount):
    assert is_valid_amount(amount) is False
