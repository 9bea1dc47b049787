"""Pydantic models for the domain trust registry."""

from __future__ import annotations

from typing import Literal

from ._base import CamelModel

DomainStatus = Literal["trusted", "unverified", "blocked"]


class RegistryEntry(CamelModel):
    """Trust status of one domain."""

    domain: str
    status: DomainStatus
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    registered_at: str | None = None
    verified_at: str | None = None


class RegistryListing(CamelModel):
    """Body of the registry endpoint."""

    domains: list[RegistryEntry] = []


class Registry(RegistryListing):
    """A versioned registry document, as maintained by the service."""

    updated_at: str
    version: str = "1.0.0"
