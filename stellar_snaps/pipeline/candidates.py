"""Candidate links a scan feeds into the pipeline."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from ..link_utils import candidate_urls
from .document import Document


@dataclass
class LinkCandidate:
    """An element that may stand for a snap, with the URLs to try in order.

    A rendered card is inserted right after ``element``.
    """

    element: Any
    urls: list[str] = field(default_factory=list)


# (document, domains worth looking for) -> candidates
Extractor = Callable[[Document, set[str]], Iterable[LinkCandidate]]


def anchor_candidates(document: Document, known_domains: set[str]) -> Iterable[LinkCandidate]:
    """Every anchor on the page, with its href and visible-text URLs."""
    for anchor in document.anchors():
        urls = candidate_urls(document.attr(anchor, "href"), document.text(anchor), document.url)
        yield LinkCandidate(element=anchor, urls=urls)
