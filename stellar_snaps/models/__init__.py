"""Pydantic models for the stellar-snaps application."""

from __future__ import annotations

from .config import (
    BridgeConfig,
    HorizonConfig,
    PathsConfig,
    PipelineConfig,
    RegistryConfig,
    ServiceConfig,
    SnapsConfig,
)
from .discovery import DiscoveryFile, DiscoveryRule
from .links import ResolvedUrl
from .registry import DomainStatus, Registry, RegistryEntry, RegistryListing
from .snap import Snap, SnapCreate, SnapMetadata
from .uri import ParsedSnap

__all__ = [
    "BridgeConfig",
    "DiscoveryFile",
    "DiscoveryRule",
    "DomainStatus",
    "HorizonConfig",
    "ParsedSnap",
    "PathsConfig",
    "PipelineConfig",
    "Registry",
    "RegistryConfig",
    "RegistryEntry",
    "RegistryListing",
    "ResolvedUrl",
    "ServiceConfig",
    "Snap",
    "SnapCreate",
    "SnapMetadata",
    "SnapsConfig",
]
