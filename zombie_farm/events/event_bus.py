"""Synchronous event bus for publishing farm events to the host.

The bus decouples the engine from whatever the host does with events
(activity logs, broadcasts, achievements). Handlers run immediately, in
registration order. A failing handler is logged and skipped; it never
turns into an engine error.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class EventBus:
    """Synchronous pub/sub keyed by event type.

    Example:
        bus = EventBus()
        bus.subscribe(ZombieFedEvent, activity_log.record)
        bus.emit(ZombieFedEvent(zombie_id="z1", happiness_gained=10, new_happiness=60))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def emit(self, event: object) -> None:
        """Dispatch ``event`` to every handler subscribed to its type."""
        handlers = self._handlers.get(type(event))
        if not handlers:
            return
        for handler in list(handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Event handler {handler!r} failed for {type(event).__name__}")

    def emit_all(self, events: Iterable[object]) -> None:
        for event in events:
            self.emit(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a handler.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def clear_subscribers(self) -> None:
        self._handlers.clear()

    def subscriber_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))
