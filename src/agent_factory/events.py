"""Synchronous in-process publish/subscribe registry."""

import functools
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

Handler = Callable[[Any], None]


def _event_key(event: str | Enum) -> str:
    return event.value if isinstance(event, Enum) else event


class EventEmitter:
    """Maps event names to ordered subscriber lists.

    Delivery is synchronous and in subscription order. Each publish works on
    a snapshot of the subscribers, so handlers may subscribe or unsubscribe
    while an event is being delivered without affecting that delivery. A
    handler that raises is logged and skipped.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self.logger = logging.getLogger(__name__)

    def subscribe(self, event: str | Enum, handler: Handler) -> Handler:
        """Register a handler; returns it so it can be passed to unsubscribe."""
        self._subscribers.setdefault(_event_key(event), []).append(handler)
        return handler

    def subscribe_once(self, event: str | Enum, handler: Handler) -> Handler:
        """Register a handler that removes itself before its first call."""
        fired = False

        @functools.wraps(handler)
        def once_wrapper(payload: Any) -> None:
            nonlocal fired
            if fired:
                return
            fired = True
            self.unsubscribe(event, once_wrapper)
            handler(payload)

        return self.subscribe(event, once_wrapper)

    def unsubscribe(self, event: str | Enum, handler: Handler) -> None:
        """Remove the first registration of handler (or of its once-wrapper)."""
        key = _event_key(event)
        subscribers = self._subscribers.get(key)
        if not subscribers:
            return

        for index, registered in enumerate(subscribers):
            if registered == handler or getattr(registered, "__wrapped__", None) == handler:
                del subscribers[index]
                break

        if not subscribers:
            del self._subscribers[key]

    def clear(self, event: str | Enum | None = None) -> None:
        """Remove all handlers for one event, or for every event."""
        if event is None:
            self._subscribers.clear()
        else:
            self._subscribers.pop(_event_key(event), None)

    def publish(self, event: str | Enum, payload: Any = None) -> bool:
        """Deliver payload to every subscriber of event.

        Returns:
            False if the event had no subscribers, True otherwise
        """
        key = _event_key(event)
        subscribers = self._subscribers.get(key)
        if not subscribers:
            return False

        for handler in list(subscribers):
            try:
                handler(payload)
            except Exception:
                self.logger.exception(f'Error in event listener for "{key}"')

        return True

    def listener_count(self, event: str | Enum) -> int:
        return len(self._subscribers.get(_event_key(event), []))

    def event_names(self) -> list[str]:
        return list(self._subscribers)

    def listeners(self, event: str | Enum) -> list[Handler]:
        return list(self._subscribers.get(_event_key(event), []))
