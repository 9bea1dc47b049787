"""Page abstraction used by the discovery pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Any

from bs4 import BeautifulSoup, Tag

from ..payment import CardView
from ..renderer import AMOUNT_INPUT_CLASS, CARD_CLASS, PAY_BUTTON_CLASS, SNAP_ID_ATTR, STATUS_CLASS


class Document(ABC):
    """
    The page being scanned.

    Elements are opaque to the pipeline; it only hands them back to the
    document. ``element_key`` must be stable for as long as the element is
    part of the page.
    """

    url: str | None = None

    @abstractmethod
    def anchors(self) -> list[Any]:
        """All ``a[href]`` elements, in document order."""

    @abstractmethod
    def select(self, selector: str, root: Any = None) -> list[Any]:
        """Elements matching a CSS selector."""

    @abstractmethod
    def attr(self, element: Any, name: str) -> str | None: ...

    @abstractmethod
    def text(self, element: Any) -> str: ...

    @abstractmethod
    def element_key(self, element: Any) -> Hashable: ...

    @abstractmethod
    def inside_card(self, element: Any) -> bool:
        """True for elements that belong to an already rendered card."""

    @abstractmethod
    def has_card(self, snap_id: str) -> bool: ...

    @abstractmethod
    def insert_card_after(self, element: Any, snap_id: str, markup: str) -> Any | None:
        """
        Insert ``markup`` as the next sibling of ``element``.

        Must re-check :meth:`has_card` first and return None without
        inserting when a card for ``snap_id`` is already present.
        """

    @abstractmethod
    def apply_card_view(self, snap_id: str, view: CardView) -> None: ...

    @abstractmethod
    def amount_input(self, snap_id: str) -> str | None:
        """Value typed into an open-amount card, if any."""


def _has_class(tag: Tag, name: str) -> bool:
    return name in (tag.get("class") or [])


class SoupDocument(Document):
    """:class:`Document` backed by a BeautifulSoup tree."""

    def __init__(self, html: str | BeautifulSoup, url: str | None = None):
        self.soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")
        self.url = url
        self._keyed: dict[int, Tag] = {}

    def anchors(self) -> list[Tag]:
        return self.soup.find_all("a", href=True)

    def select(self, selector: str, root: Tag | None = None) -> list[Tag]:
        return (root if root is not None else self.soup).select(selector)

    def attr(self, element: Tag, name: str) -> str | None:
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self, element: Tag) -> str:
        return element.get_text(" ", strip=True)

    def element_key(self, element: Tag) -> Hashable:
        # Tags compare by content, so two identical anchors would collide.
        # Holding the tag keeps its id from being reused by a later element.
        self._keyed.setdefault(id(element), element)
        return id(element)

    def inside_card(self, element: Tag) -> bool:
        if _has_class(element, CARD_CLASS):
            return True
        return element.find_parent(class_=CARD_CLASS) is not None

    def card(self, snap_id: str) -> Tag | None:
        return self.soup.find(class_=CARD_CLASS, attrs={SNAP_ID_ATTR: snap_id})

    def cards(self) -> list[Tag]:
        return self.soup.find_all(class_=CARD_CLASS)

    def has_card(self, snap_id: str) -> bool:
        return self.card(snap_id) is not None

    def insert_card_after(self, element: Tag, snap_id: str, markup: str) -> Tag | None:
        if self.has_card(snap_id):
            return None
        fragment = BeautifulSoup(markup, "html.parser")
        card = fragment.find(class_=CARD_CLASS)
        if card is None:
            return None
        element.insert_after(card.extract())
        return card

    def apply_card_view(self, snap_id: str, view: CardView) -> None:
        card = self.card(snap_id)
        if card is None:
            return

        button = card.find(class_=PAY_BUTTON_CLASS)
        if button is not None:
            button.string = view.label
            if view.disabled:
                button["disabled"] = ""
            elif button.has_attr("disabled"):
                del button["disabled"]
            button["class"] = [PAY_BUTTON_CLASS, "snap-pay-success"] if view.success else [PAY_BUTTON_CLASS]

        status = card.find(class_=STATUS_CLASS)
        if status is not None:
            status.string = view.status
            status["class"] = [STATUS_CLASS, f"snap-status-{view.status_kind}"] if view.status_kind else [STATUS_CLASS]

    def amount_input(self, snap_id: str) -> str | None:
        card = self.card(snap_id)
        if card is None:
            return None
        field = card.find("input", class_=AMOUNT_INPUT_CLASS)
        if field is None:
            return None
        return field.get("value") or None

    def set_amount_input(self, snap_id: str, value: str) -> None:
        card = self.card(snap_id)
        field = card.find("input", class_=AMOUNT_INPUT_CLASS) if card is not None else None
        if field is not None:
            field["value"] = value

    def append_html(self, markup: str, parent: Tag | None = None) -> None:
        """Append markup to ``parent`` (default: ``<body>``), as a feed loading more items."""
        target = parent if parent is not None else (self.soup.body or self.soup)
        fragment = BeautifulSoup(markup, "html.parser")
        for node in list(fragment.contents):
            target.append(node.extract())

    def render(self) -> str:
        return str(self.soup)
