"""Publish-subscribe bus carrying viewport and schedule notifications.

The viewport transform publishes ViewportChangedEvent on every committed
state change and the schedule canvas publishes ScheduleLoadedEvent; window
chrome (title, status bar) subscribes here instead of reaching into the
canvas.
"""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List, Optional, Type, TypeVar

from stagegrid.application.events import Event

E = TypeVar('E', bound=Event)
Handler = Callable[[Event], None]

logger = logging.getLogger(__name__)


class EventBus:
    """Dispatches events to the handlers registered for their exact type."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[Type[Event], List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        self._handlers[event_type].append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]

    def publish(self, event: Event) -> int:
        """Deliver an event and return how many handlers received it.

        Handlers registered or removed while dispatching take effect from the
        next publish. A failing handler is logged; debug runs re-raise so
        tests surface the error.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, ()))
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", handler, event_type.__name__)
                if __debug__:
                    raise
        return len(handlers)

    def subscriber_count(self, event_type: Type[Event]) -> int:
        return len(self._handlers.get(event_type, ()))

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        return self.subscriber_count(event_type) > 0

    def clear(self, event_type: Optional[Type[Event]] = None) -> None:
        """Drop every subscription, or only those for event_type."""
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)
