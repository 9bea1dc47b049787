"""API route modules."""

from . import service, snaps

__all__ = ["service", "snaps"]
