"""Connection event kinds and listener registry.

Connections notify interested parties about things that happen outside of
any single request: the socket closing, transport errors, diagnostic log
lines. Listeners are plain callables registered per event name.

Usage:
    listeners = EventListeners()
    unsubscribe = listeners.subscribe(ConnectionEvent.CLOSE, on_close)
    listeners.emit(ConnectionEvent.CLOSE, 1000, "normal closure")
    unsubscribe()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Listeners are called synchronously with whatever arguments the event carries
EventHandler = Callable[..., Any]


class ConnectionEvent(str, Enum):
    """Events a connection can emit."""

    CLOSE = "close"  # Connection torn down (code, reason)
    LOG = "log"  # Diagnostic message (str)
    SOCKET_ERROR = "socketError"  # Transport-level failure (exception)


def event_name(event: str | ConnectionEvent) -> str:
    """Normalize an event to its string name."""
    return event.value if isinstance(event, ConnectionEvent) else event


class EventListeners:
    """Per-event ordered lists of handlers.

    A handler registered twice is called twice, and removing it removes one
    registration, mirroring the usual emitter semantics.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def on(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Register a handler for an event."""
        self._handlers.setdefault(event_name(event), []).append(handler)

    def remove_listener(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Remove one registration of a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_name(event))
        if handlers and handler in handlers:
            handlers.remove(handler)

    def subscribe(
        self, event: str | ConnectionEvent, handler: EventHandler
    ) -> Callable[[], None]:
        """Register a handler and return a function that removes it."""
        self.on(event, handler)
        return unsubscriber(self.remove_listener, event, handler)

    def listener_count(self, event: str | ConnectionEvent) -> int:
        """Number of handlers registered for an event."""
        return len(self._handlers.get(event_name(event), []))

    def emit(self, event: str | ConnectionEvent, *args: Any) -> int:
        """Call every handler for an event.

        Returns:
            Number of handlers called
        """
        name = event_name(event)
        # Copy so handlers may unsubscribe while being called
        handlers = list(self._handlers.get(name, []))
        for handler in handlers:
            try:
                handler(*args)
            except Exception:
                logger.exception(f"Error in listener for {name}")
        return len(handlers)

    def clear(self) -> None:
        """Drop every registration."""
        self._handlers.clear()


def unsubscriber(
    remove: Callable[[str | ConnectionEvent, EventHandler], None],
    event: str | ConnectionEvent,
    handler: EventHandler,
) -> Callable[[], None]:
    """Build an idempotent unsubscribe function around a remove call."""
    done = False

    def unsubscribe() -> None:
        nonlocal done
        if not done:
            done = True
            remove(event, handler)

    return unsubscribe
