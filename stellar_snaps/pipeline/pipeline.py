"""Link discovery: find snap links on a page and render a card for each."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Hashable, Iterable
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from ..bridge import WalletBridge
from ..constants import DISCOVERY_FILE_PATH
from ..discovery import match_url_to_rule, parse_discovery_file
from ..errors import InvalidDiscoveryFile
from ..link_utils import extract_path, origin_for_domain
from ..models import DiscoveryFile, PipelineConfig, RegistryEntry, SnapMetadata
from ..payment import CardView, PaymentAction, PaymentState
from ..registry import RegistryClient
from ..renderer import render_card
from ..resolver import UrlResolver
from .candidates import Extractor, LinkCandidate, anchor_candidates
from .document import Document
from .triggers import Debouncer, PageChange, PageChangeNotifier, PageEvent
from .x_feed import is_x_page, x_feed_candidates

log = logging.getLogger(__name__)


@dataclass
class RenderedCard:
    snap_id: str
    metadata: SnapMetadata
    url: str
    origin: str
    entry: RegistryEntry


class DiscoveryPipeline:
    """
    Scans a :class:`Document` for links to snaps and renders them.

    State lives for the life of the page: elements already visited, snap ids
    already rendered, URLs being processed right now and discovery files
    already fetched. Per-link work runs as independent tasks; nothing is
    locked. Instead every irreversible step re-checks the rendered ids and
    the document right before it happens.

    Failures while processing a link mean "not a snap link" and are only
    logged.
    """

    def __init__(
        self,
        document: Document,
        client: httpx.AsyncClient,
        registry: RegistryClient,
        *,
        resolver: UrlResolver | None = None,
        notifier: PageChangeNotifier | None = None,
        settings: PipelineConfig | None = None,
        extractors: list[Extractor] | None = None,
    ):
        self.document = document
        self.client = client
        self.registry = registry
        self.resolver = resolver or UrlResolver(client)
        self.notifier = notifier
        self.settings = settings or PipelineConfig()

        if extractors is None:
            extractors = [anchor_candidates]
            if self.settings.x_feed:
                extractors.append(_x_feed_if_x_page)
        self.extractors = extractors

        self.visited: set[Hashable] = set()
        self.rendered_ids: set[str] = set()
        self.pending_urls: set[str] = set()
        self.discovery_cache: dict[str, DiscoveryFile] = {}
        self.cards: dict[str, RenderedCard] = {}
        self.actions: dict[str, PaymentAction] = {}
        self.scan_count = 0

        self._tasks: set[asyncio.Task] = set()
        self._debouncer = Debouncer(self.settings.debounce_ms / 1000, self.scan)
        self._timers: list[asyncio.TimerHandle] = []
        self._unsubscribe: Callable[[], None] | None = None
        self._scroll_scheduled = False
        self._last_url = document.url
        self._semaphore = asyncio.Semaphore(self.settings.max_concurrency) if self.settings.max_concurrency else None

    # Lifecycle

    def start(self) -> None:
        """Subscribe to page changes and schedule the first scan. Needs a running loop."""
        loop = asyncio.get_running_loop()
        self._spawn(self.registry.ensure_loaded())
        if self.notifier is not None:
            self._unsubscribe = self.notifier.subscribe(self.on_page_change)
        self._timers.append(loop.call_later(self.settings.initial_delay_ms / 1000, self.schedule_scan))

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._debouncer.cancel()
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
        for task in list(self._tasks):
            task.cancel()

    async def drain(self) -> None:
        """Wait until no link is being processed, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def settle(self) -> None:
        """Wait for any scheduled scan to run and for all its work to finish."""
        while self._debouncer.pending or self._tasks:
            if self._tasks:
                await self.drain()
            else:
                await asyncio.sleep(self.settings.debounce_ms / 1000 / 2 or 0.001)

    async def run_once(self) -> list[RenderedCard]:
        """Load the registry, scan once and wait for the result."""
        await self.registry.ensure_loaded()
        self.scan()
        await self.drain()
        return list(self.cards.values())

    # Triggers

    def on_page_change(self, change: PageChange) -> None:
        if change.event == PageEvent.MUTATION:
            if change.added_nodes > 0:
                self.schedule_scan()
        elif change.event == PageEvent.SCROLL:
            # At most one scan request per loop turn while scrolling.
            if not self._scroll_scheduled:
                self._scroll_scheduled = True
                asyncio.get_running_loop().call_soon(self._scroll_tick)
        elif change.event == PageEvent.NAVIGATION:
            loop = asyncio.get_running_loop()
            self._timers.append(
                loop.call_later(self.settings.navigation_delay_ms / 1000, self._check_navigation, change.url)
            )

    def _scroll_tick(self) -> None:
        self._scroll_scheduled = False
        self.schedule_scan()

    def _check_navigation(self, url: str | None) -> None:
        if url is None or url == self._last_url:
            return
        self._last_url = url
        self.document.url = url
        # A new page may show the same snap again; old elements are gone anyway.
        self.rendered_ids.clear()
        self.schedule_scan()

    def schedule_scan(self) -> None:
        self._debouncer.trigger()

    # Scanning

    def _known_domains(self) -> set[str]:
        return {entry.domain.lower() for entry in self.registry.entries if entry.status != "blocked"}

    def candidates(self) -> Iterable[LinkCandidate]:
        known = self._known_domains()
        for extractor in self.extractors:
            yield from extractor(self.document, known)

    def scan(self) -> int:
        """Start processing every new candidate on the page. Returns how many were started."""
        self.scan_count += 1
        started = 0
        for candidate in self.candidates():
            key = self.document.element_key(candidate.element)
            if key in self.visited or self.document.inside_card(candidate.element):
                continue
            # Marked before any await so no later scan picks it up again.
            self.visited.add(key)
            if not candidate.urls:
                continue
            self._spawn(self._guarded(candidate))
            started += 1
        log.debug("Scan %d started %d link tasks", self.scan_count, started)
        return started

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guarded(self, candidate: LinkCandidate) -> None:
        try:
            if self._semaphore is not None:
                async with self._semaphore:
                    await self.process_candidate(candidate)
            else:
                await self.process_candidate(candidate)
        except Exception as e:
            log.debug("Error processing link %s: %s", candidate.urls[0], e)

    async def process_candidate(self, candidate: LinkCandidate) -> RenderedCard | None:
        """Try the candidate's URLs in order; stop at the first that renders."""
        for url in candidate.urls:
            card = await self.process_link(candidate.element, url)
            if card is not None:
                return card
        return None

    async def process_link(self, element: Any, href: str) -> RenderedCard | None:
        if href in self.pending_urls:
            return None
        self.pending_urls.add(href)
        try:
            return await self._process(element, href)
        finally:
            self.pending_urls.discard(href)

    async def _process(self, element: Any, href: str) -> RenderedCard | None:
        await self.registry.ensure_loaded()

        resolved = await self.resolver.resolve(href)
        domain = resolved.domain
        if not domain:
            return None

        entry = self.registry.lookup(domain)
        if entry is None:
            return None
        if entry.status == "blocked":
            log.warning("Blocked domain: %s", domain)
            return None

        discovery = await self.fetch_discovery_file(domain)
        if discovery is None:
            log.debug("No discovery file for %s", domain)
            return None

        path = extract_path(resolved.url)
        api_path = match_url_to_rule(path, discovery.rules)
        if api_path is None:
            log.debug("No matching rule for %s", path)
            return None

        dedup_key = path.rstrip("/").rsplit("/", 1)[-1]
        if dedup_key in self.rendered_ids:
            return None

        origin = origin_for_domain(domain)
        metadata = await self.fetch_metadata(f"{origin}{api_path}")
        if metadata is None:
            return None

        if metadata.id in self.rendered_ids:
            return None
        if self.document.has_card(metadata.id):
            self.rendered_ids.add(metadata.id)
            return None

        markup = render_card(metadata, resolved.url, entry)
        if self.document.insert_card_after(element, metadata.id, markup) is None:
            self.rendered_ids.add(metadata.id)
            return None
        self.rendered_ids.add(metadata.id)

        card = RenderedCard(snap_id=metadata.id, metadata=metadata, url=resolved.url, origin=origin, entry=entry)
        self.cards[metadata.id] = card
        log.info("Rendered snap %s from %s", metadata.id, domain)
        return card

    async def fetch_discovery_file(self, domain: str) -> DiscoveryFile | None:
        """The domain's discovery file. Only successful fetches are cached."""
        if domain in self.discovery_cache:
            return self.discovery_cache[domain]

        try:
            response = await self.client.get(f"{origin_for_domain(domain)}{DISCOVERY_FILE_PATH}")
            if not response.is_success:
                return None
            discovery = parse_discovery_file(response.json())
        except (httpx.HTTPError, ValueError, InvalidDiscoveryFile) as e:
            log.debug("Failed to fetch discovery file for %s: %s", domain, e)
            return None

        self.discovery_cache[domain] = discovery
        return discovery

    async def fetch_metadata(self, url: str) -> SnapMetadata | None:
        try:
            response = await self.client.get(url)
            if not response.is_success:
                return None
            return SnapMetadata.model_validate(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            log.debug("Failed to fetch snap metadata from %s: %s", url, e)
            return None

    # Payment

    def payment_action(
        self,
        snap_id: str,
        bridge: WalletBridge,
        horizon_urls: dict[str, str] | None = None,
    ) -> PaymentAction:
        """Payment flow for a rendered card; progress is written back to the card."""
        if snap_id in self.actions:
            return self.actions[snap_id]
        card = self.cards[snap_id]

        def update(state: PaymentState, view: CardView) -> None:
            self.document.apply_card_view(snap_id, view)

        action = PaymentAction(
            card.metadata,
            card.origin,
            bridge,
            self.client,
            horizon_urls=horizon_urls,
            on_change=update,
        )
        self.actions[snap_id] = action
        return action

    async def pay(
        self, snap_id: str, bridge: WalletBridge, horizon_urls: dict[str, str] | None = None
    ) -> PaymentAction:
        """Run a payment for a rendered card, using the card's amount field for open amounts."""
        action = self.payment_action(snap_id, bridge, horizon_urls)
        await action.run(self.document.amount_input(snap_id))
        return action


def _x_feed_if_x_page(document: Document, known_domains: set[str]) -> Iterable[LinkCandidate]:
    if is_x_page(document.url):
        yield from x_feed_candidates(document, known_domains)
