"""In-process notifications about configuration, indexing and applied changes."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """Synchronous publish-subscribe bus.

    Listeners run on the emitting thread, global ones first, then those
    registered for the exact event type. A listener that raises is logged
    and skipped so a broken observer cannot fail a patch that was already
    written.
    """

    def __init__(self) -> None:
        self._by_type: dict[type, list[Listener]] = {}
        self._any: list[Listener] = []

    def subscribe(self, event_type: type, listener: Listener) -> None:
        self._by_type.setdefault(event_type, []).append(listener)

    def on_all(self, listener: Listener) -> None:
        self._any.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove *listener* wherever it was registered."""
        if listener in self._any:
            self._any.remove(listener)
        for listeners in self._by_type.values():
            if listener in listeners:
                listeners.remove(listener)

    def emit(self, event: Any) -> None:
        for listener in [*self._any, *self._by_type.get(type(event), [])]:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, type(event).__name__)
