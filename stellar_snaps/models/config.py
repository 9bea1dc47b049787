"""Pydantic models for stellar-snaps configuration."""

from __future__ import annotations

from pydantic import BaseModel


class ServiceConfig(BaseModel):
    """Central service endpoints."""

    base_url: str = "https://stellar-snaps.vercel.app"
    registry_url: str = "https://stellar-snaps.vercel.app/api/registry"
    proxy_url: str | None = None


class RegistryConfig(BaseModel):
    """Registry cache policy."""

    ttl_seconds: float = 300
    self_domain: str = "stellar-snaps.vercel.app"
    self_name: str = "Stellar Snaps"


class PipelineConfig(BaseModel):
    """Discovery pipeline timing and limits."""

    debounce_ms: int = 300
    initial_delay_ms: int = 500
    navigation_delay_ms: int = 100
    max_concurrency: int | None = None
    http_timeout_seconds: float = 10.0
    x_feed: bool = True


class BridgeConfig(BaseModel):
    """Wallet bridge settings."""

    timeout_seconds: float = 60.0


class HorizonConfig(BaseModel):
    """Horizon endpoints per network."""

    public: str = "https://horizon.stellar.org"
    testnet: str = "https://horizon-testnet.stellar.org"


class PathsConfig(BaseModel):
    """Filesystem path overrides."""

    data_dir: str | None = None


class SnapsConfig(BaseModel):
    """Top-level configuration."""

    service: ServiceConfig = ServiceConfig()
    registry: RegistryConfig = RegistryConfig()
    pipeline: PipelineConfig = PipelineConfig()
    bridge: BridgeConfig = BridgeConfig()
    horizon: HorizonConfig = HorizonConfig()
    paths: PathsConfig = PathsConfig()
