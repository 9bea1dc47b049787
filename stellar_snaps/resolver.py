"""Short-link expansion."""

from __future__ import annotations

import asyncio
import logging

import httpx

from .link_utils import extract_domain, is_shortener_url
from .models import ResolvedUrl

log = logging.getLogger(__name__)


class UrlResolver:
    """
    Follow shortener redirects to the real destination.

    Direct URLs are returned without touching the network. Shortened URLs are
    expanded with a redirect-following HEAD request, or through a resolution
    endpoint (``GET <proxy_url>?url=...`` -> ``{url, domain}``) when one is
    configured. Successful expansions are cached for the life of the
    instance, keyed by the exact input string. A failed expansion falls back
    to the original URL and is not cached.
    """

    def __init__(self, client: httpx.AsyncClient, proxy_url: str | None = None):
        self.client = client
        self.proxy_url = proxy_url
        self._cache: dict[str, ResolvedUrl] = {}

    def cached(self, url: str) -> ResolvedUrl | None:
        return self._cache.get(url)

    async def resolve(self, url: str) -> ResolvedUrl:
        if not is_shortener_url(url):
            return ResolvedUrl(url=url, domain=extract_domain(url), original_url=url, was_shortened=False)

        if url in self._cache:
            return self._cache[url]

        try:
            final_url, domain = await self._expand(url)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            log.debug("Short link resolution failed for %s: %s", url, e)
            return ResolvedUrl(url=url, domain=extract_domain(url), original_url=url, was_shortened=True)

        resolved = ResolvedUrl(url=final_url, domain=domain, original_url=url, was_shortened=True)
        self._cache[url] = resolved
        return resolved

    async def resolve_many(self, urls: list[str]) -> list[ResolvedUrl]:
        """Resolve several URLs concurrently, preserving input order."""
        return list(await asyncio.gather(*(self.resolve(url) for url in urls)))

    async def _expand(self, url: str) -> tuple[str, str]:
        if self.proxy_url:
            response = await self.client.get(self.proxy_url, params={"url": url})
            response.raise_for_status()
            data = response.json()
            final_url = str(data["url"])
            return final_url, str(data.get("domain") or extract_domain(final_url))

        response = await self.client.head(url, follow_redirects=True)
        final_url = str(response.url)
        return final_url, extract_domain(final_url)
