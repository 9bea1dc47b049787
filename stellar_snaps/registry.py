"""Domain trust registry: document helpers and the caching client."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from .link_utils import normalize_domain
from .models import Registry, RegistryEntry, RegistryListing

log = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
_STATUSES = ("trusted", "unverified", "blocked")

# Served when no registry document has been written yet.
DEFAULT_REGISTRY_ENTRIES = [
    RegistryEntry(
        domain="stellar-snaps.vercel.app",
        status="trusted",
        name="Stellar Snaps",
        description="Official Stellar Snaps service",
    ),
    RegistryEntry(
        domain="localhost:3000",
        status="trusted",
        name="Local Development",
        description="Local development server",
    ),
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# Registry document helpers. These never mutate their input.


def create_registry(domains: list[RegistryEntry] | None = None) -> Registry:
    return Registry(domains=list(domains or []), updated_at=_now_iso())


def add_domain(registry: Registry, entry: RegistryEntry) -> Registry:
    """Add ``entry``, replacing any existing entry for the same domain."""
    key = normalize_domain(entry.domain)
    domains = list(registry.domains)
    for index, existing in enumerate(domains):
        if normalize_domain(existing.domain) == key:
            domains[index] = entry
            break
    else:
        domains.append(entry)
    return registry.model_copy(update={"domains": domains, "updated_at": _now_iso()})


def remove_domain(registry: Registry, domain: str) -> Registry:
    key = normalize_domain(domain)
    domains = [entry for entry in registry.domains if normalize_domain(entry.domain) != key]
    return registry.model_copy(update={"domains": domains, "updated_at": _now_iso()})


def get_domain_status(registry: RegistryListing, domain: str) -> RegistryEntry | None:
    key = normalize_domain(domain)
    for entry in registry.domains:
        if normalize_domain(entry.domain) == key:
            return entry
    return None


def is_domain_trusted(registry: RegistryListing, domain: str) -> bool:
    entry = get_domain_status(registry, domain)
    return entry is not None and entry.status == "trusted"


def is_domain_blocked(registry: RegistryListing, domain: str) -> bool:
    entry = get_domain_status(registry, domain)
    return entry is not None and entry.status == "blocked"


def get_trusted_domains(registry: RegistryListing) -> list[RegistryEntry]:
    return [entry for entry in registry.domains if entry.status == "trusted"]


def get_blocked_domains(registry: RegistryListing) -> list[RegistryEntry]:
    return [entry for entry in registry.domains if entry.status == "blocked"]


def validate_registry(data: Any) -> bool:
    """Structural check of a registry document. Never raises."""
    if not isinstance(data, dict):
        return False
    if not isinstance(data.get("domains"), list):
        return False
    if not isinstance(data.get("updatedAt"), str) or not isinstance(data.get("version"), str):
        return False
    return all(
        isinstance(entry, dict) and isinstance(entry.get("domain"), str) and entry.get("status") in _STATUSES
        for entry in data["domains"]
    )


def load_registry_file(path: Path, defaults: list[RegistryEntry] | None = None) -> Registry:
    """Read a registry document from disk; a missing file holds only ``defaults``."""
    if not path.exists():
        return create_registry(defaults)
    with open(path) as f:
        return Registry.model_validate(json.load(f))


def save_registry_file(path: Path, registry: Registry) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(registry.to_json_dict(), f, indent=2)


class RegistryClient:
    """
    Client-side view of the trust registry.

    ``load()`` prefers a persisted cache younger than ``ttl_seconds``, then a
    fresh fetch (which is persisted), then a stale cache. With none of those
    available, only ``self_domain`` is trusted.

    Domains are normalized the same way on store and on lookup.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        registry_url: str,
        *,
        cache_path: Path | None = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        self_domain: str = "stellar-snaps.vercel.app",
        self_name: str = "Stellar Snaps",
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.registry_url = registry_url
        self.cache_path = cache_path
        self.ttl_seconds = ttl_seconds
        self.self_domain = self_domain
        self.self_name = self_name
        self.clock = clock
        self._entries: dict[str, RegistryEntry] = {}
        self._load_task: asyncio.Task | None = None

    @property
    def entries(self) -> list[RegistryEntry]:
        return list(self._entries.values())

    def lookup(self, domain: str) -> RegistryEntry | None:
        if not domain:
            return None
        return self._entries.get(normalize_domain(domain))

    def set_entries(self, entries: list[RegistryEntry]) -> None:
        self._entries = {normalize_domain(entry.domain): entry for entry in entries}

    async def ensure_loaded(self) -> None:
        """Load once; concurrent callers share the same in-flight load."""
        if self._load_task is None:
            self._load_task = asyncio.ensure_future(self.load())
        await self._load_task

    async def refresh(self) -> None:
        """Reload ignoring the cache age."""
        self._load_task = asyncio.ensure_future(self.load(force=True))
        await self._load_task

    async def load(self, *, force: bool = False) -> None:
        cached = self._read_cache()
        if cached is not None and not force:
            timestamp, entries = cached
            if self.clock() - timestamp < self.ttl_seconds:
                self.set_entries(entries)
                log.debug("Registry loaded from cache: %d domains", len(self._entries))
                return

        if await self._fetch():
            return
        self._fallback(cached)

    async def _fetch(self) -> bool:
        try:
            response = await self.client.get(self.registry_url)
            response.raise_for_status()
            listing = RegistryListing.model_validate(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            log.warning("Failed to fetch registry from %s: %s", self.registry_url, e)
            return False

        self.set_entries(listing.domains)
        self._write_cache()
        log.info("Registry fetched: %d domains", len(self._entries))
        return True

    def _fallback(self, cached: tuple[float, list[RegistryEntry]] | None) -> None:
        if cached is not None:
            log.warning("Using stale registry cache")
            self.set_entries(cached[1])
            return
        log.warning("Registry unavailable; trusting only %s", self.self_domain)
        self.set_entries([RegistryEntry(domain=self.self_domain, status="trusted", name=self.self_name)])

    def _read_cache(self) -> tuple[float, list[RegistryEntry]] | None:
        if self.cache_path is None or not self.cache_path.exists():
            return None
        try:
            with open(self.cache_path) as f:
                data = json.load(f)
            timestamp = float(data["timestamp"])
            entries = [RegistryEntry.model_validate(item) for item in data["entries"]]
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as e:
            log.debug("Ignoring unreadable registry cache %s: %s", self.cache_path, e)
            return None
        return timestamp, entries

    def _write_cache(self) -> None:
        if self.cache_path is None:
            return
        payload = {
            "timestamp": self.clock(),
            "entries": [entry.to_json_dict() for entry in self._entries.values()],
        }
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.cache_path, "w") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            log.warning("Could not persist registry cache %s: %s", self.cache_path, e)
