"""Configuration management for stellar-snaps."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from .models.config import SnapsConfig

# Application name for XDG paths
APP_NAME = "stellar-snaps"

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "service": {
        "base_url": "https://stellar-snaps.vercel.app",
        "registry_url": "https://stellar-snaps.vercel.app/api/registry",
        "proxy_url": None,  # resolve short links through the service instead of locally
    },
    "registry": {
        "ttl_seconds": 300,
        "self_domain": "stellar-snaps.vercel.app",
        "self_name": "Stellar Snaps",
    },
    "pipeline": {
        "debounce_ms": 300,
        "initial_delay_ms": 500,
        "navigation_delay_ms": 100,
        "max_concurrency": None,  # None = unbounded
        "http_timeout_seconds": 10.0,
        "x_feed": True,
    },
    "bridge": {
        "timeout_seconds": 60.0,
    },
    "horizon": {
        "public": "https://horizon.stellar.org",
        "testnet": "https://horizon-testnet.stellar.org",
    },
    "paths": {
        # If not set, XDG defaults are used
        "data_dir": None,
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config home directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")))


def get_xdg_data_home() -> Path:
    """Get XDG data home directory."""
    return Path(os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share")))


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_xdg_config_home() / APP_NAME / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration, merging with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        with open(config_path) as f:
            user_config = json.load(f)
            config = deep_merge(config, user_config)

    return config


def load_settings() -> SnapsConfig:
    """Load configuration as a validated model."""
    return SnapsConfig.model_validate(load_config())


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_data_dir() -> Path:
    """
    Get the data directory for stellar-snaps.

    Priority:
    1. STELLAR_SNAPS_DATA_DIR environment variable
    2. paths.data_dir in config.json
    3. XDG default: ~/.local/share/stellar-snaps/
    """
    env_dir = os.environ.get("STELLAR_SNAPS_DATA_DIR")
    if env_dir:
        return Path(env_dir)

    config = load_config()
    config_dir = config.get("paths", {}).get("data_dir")
    if config_dir:
        return Path(config_dir)

    return get_xdg_data_home() / APP_NAME


def get_database_path() -> Path:
    """Get the snaps database path."""
    return get_data_dir() / "snaps.db"


def get_registry_cache_path() -> Path:
    """Get the path of the client-side registry cache."""
    return get_data_dir() / "registry-cache.json"


def get_registry_path() -> Path:
    """Get the path of the registry document served by the web app."""
    return get_data_dir() / "registry.json"
