"""Pydantic models for domain discovery files."""

from __future__ import annotations

from ._base import CamelModel


class DiscoveryRule(CamelModel):
    """Maps a URL path pattern (``*`` wildcards) to an API path (``$1``..``$n``)."""

    path_pattern: str
    api_path: str


class DiscoveryFile(CamelModel):
    """Manifest hosted at ``/.well-known/stellar-snap.json`` on a snap domain."""

    name: str
    description: str | None = None
    icon: str | None = None
    rules: list[DiscoveryRule]
