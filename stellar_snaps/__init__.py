"""Stellar Snaps - shareable Stellar payment links, discovered and rendered in place."""

try:
    from importlib.metadata import version

    __version__ = version("stellar-snaps")
except Exception:
    __version__ = "0.0.0-dev"
