"""Extra candidates for the X (Twitter) feed.

X rewrites every outbound link to ``t.co`` and shows link previews as cards
where only the destination's domain is visible as text. These elements are
picked up when their text names a domain from the registry, and their
shortened links go through the normal resolve and render path.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlparse

from ..link_utils import absolutize, extract_urls_from_text, url_from_link_text
from .candidates import LinkCandidate
from .document import Document

CARD_WRAPPER_SELECTOR = '[data-testid="card.wrapper"]'
TWEET_TEXT_SELECTOR = '[data-testid="tweetText"]'
X_HOSTS = ("x.com", "twitter.com")


def is_x_page(url: str | None) -> bool:
    if not url:
        return False
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return False
    return any(hostname == host or hostname.endswith(f".{host}") for host in X_HOSTS)


def _mentions_domain(text: str, known_domains: set[str]) -> bool:
    lowered = text.lower()
    return any(domain and domain in lowered for domain in known_domains)


def _element_urls(document: Document, element) -> list[str]:
    urls: list[str] = []
    for anchor in document.select("a[href]", root=element):
        url = absolutize(document.attr(anchor, "href") or "", document.url)
        if url and url not in urls:
            urls.append(url)
        text_url = url_from_link_text(document.text(anchor))
        if text_url and text_url not in urls:
            urls.append(text_url)
    return urls


def x_feed_candidates(document: Document, known_domains: set[str]) -> Iterable[LinkCandidate]:
    """Link-preview cards and tweet bodies that mention a known domain."""
    if not known_domains:
        return

    for wrapper in document.select(CARD_WRAPPER_SELECTOR):
        if document.inside_card(wrapper) or not _mentions_domain(document.text(wrapper), known_domains):
            continue
        urls = _element_urls(document, wrapper)
        if urls:
            yield LinkCandidate(element=wrapper, urls=urls)

    for body in document.select(TWEET_TEXT_SELECTOR):
        text = document.text(body)
        if not _mentions_domain(text, known_domains):
            continue
        urls = _element_urls(document, body)
        for url in extract_urls_from_text(text):
            if url not in urls:
                urls.append(url)
        if urls:
            yield LinkCandidate(element=body, urls=urls)
