"""Link discovery pipeline."""

from .candidates import Extractor, LinkCandidate, anchor_candidates
from .document import Document, SoupDocument
from .pipeline import DiscoveryPipeline, RenderedCard
from .triggers import Debouncer, ManualNotifier, PageChange, PageChangeNotifier, PageEvent
from .x_feed import x_feed_candidates

__all__ = [
    "Debouncer",
    "DiscoveryPipeline",
    "Document",
    "Extractor",
    "LinkCandidate",
    "ManualNotifier",
    "PageChange",
    "PageChangeNotifier",
    "PageEvent",
    "RenderedCard",
    "SoupDocument",
    "anchor_candidates",
    "x_feed_candidates",
]
