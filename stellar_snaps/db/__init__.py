"""SQLite storage for snaps."""

from .connection import get_connection, init_db
from .snaps import delete_snap, get_snap, insert_snap, list_snaps, validate_snap_input

__all__ = [
    "delete_snap",
    "get_connection",
    "get_snap",
    "init_db",
    "insert_snap",
    "list_snaps",
    "validate_snap_input",
]
