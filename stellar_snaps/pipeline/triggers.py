"""Page-change notifications and scan debouncing."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class PageEvent(str, Enum):
    MUTATION = "mutation"
    SCROLL = "scroll"
    NAVIGATION = "navigation"


@dataclass
class PageChange:
    event: PageEvent
    added_nodes: int = 0
    url: str | None = None


Listener = Callable[[PageChange], None]


class PageChangeNotifier(ABC):
    """Source of DOM-mutation, scroll and navigation signals."""

    @abstractmethod
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unsubscribes it."""


class ManualNotifier(PageChangeNotifier):
    """Notifier driven explicitly by the caller, e.g. a crawler or a test."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, change: PageChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    def mutated(self, added_nodes: int = 1) -> None:
        self.emit(PageChange(PageEvent.MUTATION, added_nodes=added_nodes))

    def scrolled(self) -> None:
        self.emit(PageChange(PageEvent.SCROLL))

    def navigated(self, url: str) -> None:
        self.emit(PageChange(PageEvent.NAVIGATION, url=url))


class Debouncer:
    """Collapse bursts of triggers into one call ``delay`` seconds after the last."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = asyncio.get_running_loop().call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.callback()
