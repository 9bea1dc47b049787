"""Client for the snap service's REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from .constants import DEFAULT_BASE_URL
from .errors import InvalidAddress, SnapApiError, SnapNotFound, SnapUnauthorized
from .models import Snap, SnapCreate
from .validation import is_valid_stellar_address

log = logging.getLogger(__name__)


@dataclass
class CreateSnapResult:
    id: str
    url: str
    snap: Snap


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return fallback


class SnapClient:
    """Create, fetch, list and delete snaps on a snap service."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, client: httpx.Client | None = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> SnapClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def share_url(self, snap_id: str) -> str:
        return f"{self.base_url}/s/{snap_id}"

    def create_snap(self, data: SnapCreate) -> CreateSnapResult:
        if not is_valid_stellar_address(data.creator):
            raise InvalidAddress(data.creator, label="creator")
        if not data.title or not data.title.strip():
            raise SnapApiError("Title is required")
        if not is_valid_stellar_address(data.destination):
            raise InvalidAddress(data.destination, label="destination")
        if data.asset_code != "XLM" and not data.asset_issuer:
            raise SnapApiError("Asset issuer is required for non-XLM assets")

        response = self.client.post(f"{self.base_url}/api/snaps", json=data.to_json_dict())
        if not response.is_success:
            message = _error_message(response, f"Failed to create snap: {response.status_code}")
            raise SnapApiError(message, response.status_code)

        snap = Snap.model_validate(response.json())
        log.info("Created snap %s", snap.id)
        return CreateSnapResult(id=snap.id, url=self.share_url(snap.id), snap=snap)

    def get_snap(self, snap_id: str) -> Snap:
        response = self.client.get(f"{self.base_url}/api/snap/{snap_id}")
        if response.status_code == 404:
            raise SnapNotFound(snap_id)
        if not response.is_success:
            message = _error_message(response, f"Failed to fetch snap: {response.status_code}")
            raise SnapApiError(message, response.status_code)
        return Snap.model_validate(response.json())

    def list_snaps(self, creator: str) -> list[Snap]:
        response = self.client.get(f"{self.base_url}/api/snaps", params={"creator": creator})
        if not response.is_success:
            message = _error_message(response, f"Failed to list snaps: {response.status_code}")
            raise SnapApiError(message, response.status_code)
        return [Snap.model_validate(item) for item in response.json()]

    def delete_snap(self, snap_id: str, creator: str) -> None:
        response = self.client.delete(f"{self.base_url}/api/snaps", params={"id": snap_id, "creator": creator})
        if response.status_code == 404:
            raise SnapNotFound(snap_id)
        if response.status_code == 403:
            raise SnapUnauthorized(_error_message(response, "Unauthorized"))
        if not response.is_success:
            message = _error_message(response, f"Failed to delete snap: {response.status_code}")
            raise SnapApiError(message, response.status_code)
