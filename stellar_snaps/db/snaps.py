"""Snap CRUD operations."""

import sqlite3

from ..errors import InvalidAddress, InvalidAmount, InvalidAsset, SnapNotFound, SnapUnauthorized
from ..models import Snap, SnapCreate
from ..snap_id import generate_snap_id
from ..validation import is_valid_amount, is_valid_asset_code, is_valid_stellar_address

_COLUMNS = (
    "id, creator, title, description, image_url, destination, asset_code, asset_issuer, "
    "amount, memo, memo_type, network, created_at, updated_at"
)


def _row_to_snap(row: sqlite3.Row) -> Snap:
    return Snap.model_validate({key: row[key] for key in row.keys() if row[key] is not None})


def validate_snap_input(data: SnapCreate) -> None:
    """Reject snaps a wallet could never pay."""
    if not is_valid_stellar_address(data.destination):
        raise InvalidAddress(data.destination, label="destination")
    if data.amount and not is_valid_amount(data.amount):
        raise InvalidAmount(data.amount)
    if data.asset_code and data.asset_code.upper() != "XLM":
        if not is_valid_asset_code(data.asset_code):
            raise InvalidAsset(f"Invalid asset code: {data.asset_code}")
        if not data.asset_issuer:
            raise InvalidAsset("asset_issuer required for non-XLM assets")


def insert_snap(conn: sqlite3.Connection, data: SnapCreate, snap_id: str | None = None) -> Snap:
    """Insert a snap and return the stored row."""
    if snap_id is None:
        snap_id = generate_snap_id()
    conn.execute(
        """
        INSERT INTO snaps (
            id, creator, title, description, image_url, destination,
            asset_code, asset_issuer, amount, memo, memo_type, network
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            snap_id,
            data.creator,
            data.title,
            data.description or None,
            data.image_url or None,
            data.destination,
            data.asset_code or "XLM",
            data.asset_issuer or None,
            data.amount or None,
            data.memo or None,
            data.memo_type or "MEMO_TEXT",
            data.network or "testnet",
        ),
    )
    snap = get_snap(conn, snap_id)
    if snap is None:
        raise SnapNotFound(snap_id)
    return snap


def get_snap(conn: sqlite3.Connection, snap_id: str) -> Snap | None:
    cursor = conn.execute(f"SELECT {_COLUMNS} FROM snaps WHERE id = ?", (snap_id,))
    row = cursor.fetchone()
    return _row_to_snap(row) if row else None


def list_snaps(conn: sqlite3.Connection, creator: str) -> list[Snap]:
    """All snaps of one creator, newest first."""
    cursor = conn.execute(
        f"SELECT {_COLUMNS} FROM snaps WHERE creator = ? ORDER BY created_at DESC, rowid DESC",
        (creator,),
    )
    return [_row_to_snap(row) for row in cursor.fetchall()]


def delete_snap(conn: sqlite3.Connection, snap_id: str, creator: str) -> None:
    """Delete a snap owned by ``creator``."""
    snap = get_snap(conn, snap_id)
    if snap is None:
        raise SnapNotFound(snap_id)
    if snap.creator != creator:
        raise SnapUnauthorized()
    conn.execute("DELETE FROM snaps WHERE id = ?", (snap_id,))
