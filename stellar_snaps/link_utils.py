"""Utilities for extracting and classifying links found on a page."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlparse

_URL_RE = re.compile(r"https?://[^\s<>()]+", re.IGNORECASE)
_TRAILING_PUNCT_RE = re.compile(r"[)\],.?!:;]+$")
# Link text that shows a bare host and path, e.g. "stellar-snaps.vercel.app/s/abc".
_BARE_LINK_RE = re.compile(r"^(?:www\.)?[a-z0-9-]+(?:\.[a-z0-9-]+)+(?::\d+)?/\S*$", re.IGNORECASE)
_TRUNCATION_MARKERS = ("…", "...")
_SKIPPED_HREF_PREFIXES = ("#", "javascript:", "mailto:")

SHORTENER_DOMAINS = (
    "t.co",
    "bit.ly",
    "goo.gl",
    "tinyurl.com",
    "ow.ly",
    "is.gd",
    "buff.ly",
    "adf.ly",
    "bit.do",
    "mcaf.ee",
    "su.pr",
    "twit.ac",
    "tiny.cc",
    "lnkd.in",
    "db.tt",
    "qr.ae",
    "cur.lv",
    "ity.im",
    "q.gs",
    "po.st",
    "bc.vc",
    "u.to",
    "j.mp",
    "buzurl.com",
    "cutt.us",
    "u.bb",
    "yourls.org",
    "x.co",
    "prettylinkpro.com",
    "viralurl.com",
    "twitthis.com",
    "shorturl.at",
    "rb.gy",
    "shorturl.com",
)


def clean_url_candidate(url: str) -> str:
    """Trim punctuation commonly attached to URLs in plain text."""
    cleaned = url.strip()
    cleaned = _TRAILING_PUNCT_RE.sub("", cleaned)
    return cleaned


def extract_urls_from_text(text: str | None) -> list[str]:
    """Extract plain URLs from text."""
    if not text:
        return []
    urls: list[str] = []
    seen: set[str] = set()
    for match in _URL_RE.finditer(text):
        url = clean_url_candidate(match.group(0))
        if not url or url in seen:
            continue
        seen.add(url)
        urls.append(url)
    return urls


def _hostname(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def is_shortener_url(url: str) -> bool:
    """True when the URL's host is a known shortener or a subdomain of one."""
    host = _hostname(url)
    if not host:
        return False
    return any(host == domain or host.endswith(f".{domain}") for domain in SHORTENER_DOMAINS)


def extract_domain(url: str) -> str:
    """
    Lower-cased host of ``url``, including a non-default port.

    Keeping the port lets ``localhost:3000`` work as a registry key.
    Returns "" for anything that does not parse as an absolute URL.
    """
    try:
        parsed = urlparse(url)
        host = (parsed.hostname or "").lower()
        port = parsed.port
    except ValueError:
        return ""
    if not host:
        return ""
    if port and not (parsed.scheme == "http" and port == 80) and not (parsed.scheme == "https" and port == 443):
        return f"{host}:{port}"
    return host


def normalize_domain(domain: str) -> str:
    """Registry key form of a domain: lower case, no leading ``www.``."""
    domain = domain.strip().lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def extract_path(url: str) -> str:
    """Path component of ``url``; "" when it does not parse."""
    try:
        return urlparse(url).path
    except ValueError:
        return ""


def is_local_domain(domain: str) -> bool:
    return "localhost" in domain


def origin_for_domain(domain: str) -> str:
    """Origin used to reach a snap domain. Plain http only for localhost."""
    scheme = "http" if is_local_domain(domain) else "https"
    return f"{scheme}://{domain}"


def is_navigable_href(href: str | None) -> bool:
    """False for empty, fragment-only, ``javascript:`` and ``mailto:`` hrefs."""
    if not href:
        return False
    return not href.strip().lower().startswith(_SKIPPED_HREF_PREFIXES)


def absolutize(href: str, base_url: str | None) -> str | None:
    """Resolve a possibly relative href against the page URL."""
    href = href.strip()
    if base_url:
        try:
            href = urljoin(base_url, href)
        except ValueError:
            return None
    try:
        parsed = urlparse(href)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return href


def url_from_link_text(text: str | None) -> str | None:
    """
    Recover a URL from an anchor's visible text.

    Feeds often display ``domain/path`` without a scheme, or truncate it with
    an ellipsis. Truncated text is ignored since its path cannot be trusted.
    """
    if not text:
        return None
    text = text.strip()
    if not text or any(marker in text for marker in _TRUNCATION_MARKERS):
        return None
    urls = extract_urls_from_text(text)
    if urls:
        return urls[0]
    candidate = clean_url_candidate(text)
    if _BARE_LINK_RE.match(candidate):
        return f"https://{candidate}"
    return None


def candidate_urls(href: str | None, text: str | None, base_url: str | None = None) -> list[str]:
    """
    URLs worth resolving for one anchor, href first, then its visible text.

    Non-navigable hrefs yield nothing, even when the text looks like a link.
    """
    if not is_navigable_href(href):
        return []
    urls: list[str] = []
    primary = absolutize(href or "", base_url)
    if primary:
        urls.append(primary)
    fallback = url_from_link_text(text)
    if fallback and fallback not in urls:
        urls.append(fallback)
    return urls
