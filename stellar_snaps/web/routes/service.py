"""Registry, short-link proxy and transaction-build API routes."""

import logging
from typing import Any

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...errors import StellarSnapError
from ...link_utils import extract_domain
from ...registry import DEFAULT_REGISTRY_ENTRIES, get_domain_status, load_registry_file
from ...transaction import build_payment_transaction

log = logging.getLogger(__name__)

router = APIRouter(tags=["service"])

RESOLVE_TIMEOUT_SECONDS = 10.0
_REGISTRY_CACHE_HEADERS = {"Cache-Control": "public, max-age=300"}


async def follow_redirects(url: str) -> str:
    """Final URL after following redirects with a HEAD request."""
    async with httpx.AsyncClient(timeout=RESOLVE_TIMEOUT_SECONDS) as client:
        response = await client.head(url, follow_redirects=True)
        return str(response.url)


def _load_registry(request: Request):
    return load_registry_file(request.app.state.registry_path, DEFAULT_REGISTRY_ENTRIES)


@router.get("/registry")
async def registry_listing(request: Request, domain: str | None = None):
    """All registered domains, or the entry for ``?domain=``."""
    registry = _load_registry(request)

    if domain:
        entry = get_domain_status(registry, domain)
        if entry is None:
            return JSONResponse({"error": "Domain not found", "domain": domain}, status_code=404)
        return JSONResponse(entry.to_json_dict(), headers=_REGISTRY_CACHE_HEADERS)

    domains = [entry.to_json_dict() for entry in registry.domains]
    return JSONResponse({"domains": domains}, headers=_REGISTRY_CACHE_HEADERS)


@router.get("/proxy")
async def resolve_short_link(url: str | None = None):
    """Follow a short link's redirects for clients that cannot."""
    if not url:
        return JSONResponse({"error": "Missing url parameter"}, status_code=400)

    try:
        final_url = await follow_redirects(url)
    except httpx.HTTPError as e:
        log.warning("URL resolution failed for %s: %s", url, e)
        return JSONResponse({"error": "Failed to resolve URL", "originalUrl": url}, status_code=500)

    return JSONResponse(
        {"url": final_url, "domain": extract_domain(final_url) or None, "originalUrl": url},
        headers={"Cache-Control": "public, max-age=3600"},
    )


class BuildTxRequest(BaseModel):
    """Request body for building a payment transaction."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    source: str | None = None
    sequence: str | None = None
    destination: str | None = None
    amount: str | None = None
    asset_code: str | None = None
    asset_issuer: str | None = None
    memo: str | None = None
    memo_type: str | None = None
    network: str = "testnet"


@router.post("/build-tx")
async def build_tx(body: BuildTxRequest) -> Any:
    """Build an unsigned payment transaction for a wallet to sign."""
    if not body.source or not body.sequence or not body.destination or not body.amount:
        return JSONResponse(
            {"error": "Missing required fields: source, sequence, destination, amount"},
            status_code=400,
        )

    try:
        xdr = build_payment_transaction(
            source=body.source,
            sequence=body.sequence,
            destination=body.destination,
            amount=body.amount,
            asset_code=body.asset_code,
            asset_issuer=body.asset_issuer,
            memo=body.memo,
            memo_type=body.memo_type,
            network=body.network,
        )
    except StellarSnapError as e:
        return JSONResponse({"error": e.message, "code": e.code}, status_code=400)

    return {"xdr": xdr}
