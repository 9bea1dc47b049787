"""Web service for stellar-snaps."""

from .app import create_app

__all__ = ["create_app"]
