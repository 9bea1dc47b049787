"""Pydantic models for snap records and the metadata served to renderers."""

from __future__ import annotations

from pydantic import ConfigDict

from ._base import CamelModel


class SnapMetadata(CamelModel):
    """Metadata returned by a domain's snap endpoint. Untrusted input."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    title: str
    description: str | None = None
    destination: str
    amount: str | None = None
    asset_code: str | None = None
    asset_issuer: str | None = None
    memo: str | None = None
    memo_type: str | None = None
    network: str | None = None
    image_url: str | None = None


class SnapCreate(CamelModel):
    """Request body for creating a snap."""

    creator: str
    title: str
    destination: str
    description: str | None = None
    amount: str | None = None
    asset_code: str = "XLM"
    asset_issuer: str | None = None
    memo: str | None = None
    memo_type: str = "MEMO_TEXT"
    network: str = "testnet"
    image_url: str | None = None


class Snap(SnapMetadata):
    """A stored snap, as returned by the list/create endpoints."""

    creator: str | None = None
    asset_code: str = "XLM"
    memo_type: str = "MEMO_TEXT"
    network: str = "testnet"
    created_at: str | None = None
    updated_at: str | None = None
