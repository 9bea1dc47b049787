"""Pydantic model for parsed ``web+stellar:`` URIs."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from ..constants import network_for_passphrase


class ParsedSnap(BaseModel):
    """A decoded SEP-0007 payment (``pay``) or transaction (``tx``) request."""

    kind: Literal["pay", "tx"]
    destination: str | None = None
    amount: str | None = None
    asset_code: str | None = None
    asset_issuer: str | None = None
    memo: str | None = None
    memo_type: str | None = None
    xdr: str | None = None
    pubkey: str | None = None
    message: str | None = None
    network_passphrase: str | None = None
    callback: str | None = None

    @property
    def network(self) -> str | None:
        """Short network name; an absent passphrase means the public network."""
        return network_for_passphrase(self.network_passphrase)
