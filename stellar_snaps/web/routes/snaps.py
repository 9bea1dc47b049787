"""Snap CRUD and metadata API routes."""

import re
from typing import Any

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...db import delete_snap, get_connection, get_snap, insert_snap, list_snaps, validate_snap_input
from ...errors import SnapNotFound, SnapUnauthorized, StellarSnapError
from ...models import SnapCreate, SnapMetadata
from ...snap_id import generate_snap_id
from . import service

router = APIRouter(tags=["snaps"])

_SHARE_PATH_RE = re.compile(r"/s/([a-zA-Z0-9_-]+)")
_METADATA_CACHE_HEADERS = {"Cache-Control": "public, max-age=60, stale-while-revalidate=300"}


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _metadata(snap) -> dict[str, Any]:
    return SnapMetadata.model_validate(snap.model_dump()).model_dump(by_alias=True)


@router.get("/snaps")
async def list_creator_snaps(request: Request, creator: str | None = None):
    """List snaps for a creator."""
    if not creator:
        return _error("creator param required", 400)

    with get_connection(request.app.state.db_path) as conn:
        snaps = list_snaps(conn, creator)
    return [snap.model_dump(by_alias=True) for snap in snaps]


@router.post("/snaps")
async def create_snap(request: Request):
    """Create a snap. Returns the stored record."""
    try:
        body = await request.json()
        data = SnapCreate.model_validate(body)
    except (ValueError, ValidationError):
        return _error("creator, title, and destination are required", 400)

    if not data.creator or not data.title or not data.destination:
        return _error("creator, title, and destination are required", 400)

    try:
        validate_snap_input(data)
    except StellarSnapError as e:
        return _error(e.message, 400)

    with get_connection(request.app.state.db_path) as conn:
        snap = insert_snap(conn, data, generate_snap_id())
        conn.commit()
    return JSONResponse(snap.model_dump(by_alias=True), status_code=201)


@router.delete("/snaps")
async def remove_snap(request: Request, id: str | None = None, creator: str | None = None) -> Any:
    """Delete a snap; only its creator may do so."""
    if not id or not creator:
        return _error("id and creator params required", 400)

    with get_connection(request.app.state.db_path) as conn:
        try:
            delete_snap(conn, id, creator)
        except SnapNotFound:
            return _error("Snap not found", 404)
        except SnapUnauthorized:
            return _error("Unauthorized", 403)
        conn.commit()
    return {"success": True}


@router.get("/snap/{snap_id}")
async def snap_metadata(request: Request, snap_id: str, resolve: str | None = None):
    """
    Metadata for one snap.

    With ``?resolve=<short url>`` the short link is followed first and the
    snap id is taken from the resulting ``/s/<id>`` URL.
    """
    if resolve:
        try:
            final_url = await service.follow_redirects(resolve)
        except httpx.HTTPError:
            return _error("Failed to resolve URL", 500)
        match = _SHARE_PATH_RE.search(final_url)
        if not match:
            return _error("Not a valid snap URL", 400)
        snap_id = match.group(1)

    with get_connection(request.app.state.db_path) as conn:
        snap = get_snap(conn, snap_id)
    if snap is None:
        return _error("Snap not found", 404)
    return JSONResponse(_metadata(snap), headers=_METADATA_CACHE_HEADERS)


@router.get("/metadata/{snap_id}")
async def card_metadata(request: Request, snap_id: str):
    """Metadata used by renderers to draw a card."""
    with get_connection(request.app.state.db_path) as conn:
        snap = get_snap(conn, snap_id)
    if snap is None:
        return _error("Snap not found", 404)
    return _metadata(snap)
