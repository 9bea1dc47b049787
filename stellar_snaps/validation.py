"""Structural validators for addresses, asset codes and amounts.

All predicates are total: they return False for anything they cannot parse
and never raise.
"""

from __future__ import annotations

import math
import re

_ASSET_CODE_RE = re.compile(r"^[a-zA-Z0-9]{1,12}$")


def is_valid_stellar_address(address: object) -> bool:
    """Return True for 56-character strings starting with ``G``.

    The checksum is not verified.
    """
    if not isinstance(address, str) or not address:
        return False
    return len(address) == 56 and address.startswith("G")


def is_valid_asset_code(code: object) -> bool:
    """Return True for 1-12 alphanumeric characters (``XLM`` included)."""
    if not isinstance(code, str) or not code:
        return False
    return _ASSET_CODE_RE.match(code) is not None


def is_valid_amount(amount: object) -> bool:
    """Return True when ``amount`` is a finite decimal string greater than zero."""
    if not isinstance(amount, str) or not amount.strip():
        return False
    if "_" in amount:
        return False
    try:
        value = float(amount)
    except ValueError:
        return False
    return math.isfinite(value) and value > 0
