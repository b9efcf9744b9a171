"""Observer bus for state store events.

Subscribers are kept per event in registration order and are invoked one
after another. Async subscribers are awaited before the next one runs, so
dispatch is fully serialized and deterministic.
"""

import inspect
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

Subscriber = Callable[[Any], Any]


class Event(str, Enum):
    """Events published by the state store."""

    STATE_CHANGED = "stateChanged"
    ERROR = "error"


class ObserverBus:
    """
    Map event names to ordered subscriber lists.

    PATTERN: Synchronous in-order dispatch, async-aware
    CRITICAL: Subscriber exceptions propagate to the publisher
    """

    def __init__(self):
        """Initialize an empty bus."""
        self._subscribers: Dict[Event, List[Subscriber]] = {}

    def subscribe(self, event: Event, callback: Subscriber) -> None:
        """
        Register a callback for an event.

        Args:
            event: Event to listen for
            callback: Sync or async callable receiving the event payload
        """
        event = Event(event)
        self._subscribers.setdefault(event, []).append(callback)
        logger.debug(f"Subscribed {getattr(callback, '__qualname__', callback)} to {event.value}")

    def unsubscribe(self, event: Event, callback: Subscriber) -> bool:
        """
        Remove the first registration of a callback.

        Returns:
            True if a registration was removed
        """
        callbacks = self._subscribers.get(Event(event), [])
        try:
            callbacks.remove(callback)
        except ValueError:
            return False
        return True

    def subscribers(self, event: Event) -> Tuple[Subscriber, ...]:
        """Registered callbacks for an event, in dispatch order."""
        return tuple(self._subscribers.get(Event(event), ()))

    async def publish(self, event: Event, data: Any) -> None:
        """
        Deliver an event to every subscriber in registration order.

        Changes to the subscriber list made during dispatch apply to later
        publishes only.

        Args:
            event: Event being published
            data: Event payload

        Raises:
            Exception: Whatever a subscriber raises; remaining subscribers are skipped
        """
        for callback in self.subscribers(event):
            result = callback(data)
            if inspect.isawaitable(result):
                await result
