"""Short, URL-safe snap identifiers."""

from __future__ import annotations

import re
import secrets
from urllib.parse import urlparse

ALPHABET = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"
DEFAULT_ID_LENGTH = 8
DEFAULT_ID_PATTERNS = ("/s/", "/snap/", "/pay/")

_SNAP_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")
_LEADING_ID_RE = re.compile(r"^([a-zA-Z0-9_-]+)")


def generate_snap_id(length: int = DEFAULT_ID_LENGTH) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def is_valid_snap_id(snap_id: str | None) -> bool:
    """4 to 32 URL-safe characters."""
    if not snap_id or not isinstance(snap_id, str):
        return False
    if not 4 <= len(snap_id) <= 32:
        return False
    return bool(_SNAP_ID_RE.match(snap_id))


def extract_snap_id(url: str, patterns: tuple[str, ...] = DEFAULT_ID_PATTERNS) -> str | None:
    """Pull the snap id out of a share URL such as ``https://host/s/abc123``."""
    try:
        path = urlparse(url).path
    except ValueError:
        return None

    for pattern in patterns:
        index = path.find(pattern)
        if index == -1:
            continue
        match = _LEADING_ID_RE.match(path[index + len(pattern) :])
        if match and is_valid_snap_id(match.group(1)):
            return match.group(1)
    return None
