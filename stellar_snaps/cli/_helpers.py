"""Shared CLI utilities."""

import httpx

from ..config import get_registry_cache_path
from ..models import SnapsConfig
from ..registry import RegistryClient


def _async_client(settings: SnapsConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.pipeline.http_timeout_seconds)


def _registry_client(client: httpx.AsyncClient, settings: SnapsConfig) -> RegistryClient:
    return RegistryClient(
        client,
        settings.service.registry_url,
        cache_path=get_registry_cache_path(),
        ttl_seconds=settings.registry.ttl_seconds,
        self_domain=settings.registry.self_domain,
        self_name=settings.registry.self_name,
    )


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))
