"""In-process publish/subscribe bus for editor notifications.

Handlers are keyed by the exact event class and run synchronously on the
publishing thread, so a session's ``save`` has notified every listener by the
time it returns.  A failing handler is logged and never stops delivery to the
others.
"""

import logging
import threading
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    event_type: Type[Event]
    handler: Callable[[Event], None]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[Event], handler: Callable[[Event], None]) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        with self._lock:
            self._handlers[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.cancel()
        with self._lock:
            subs = self._handlers.get(subscription.event_type)
            if subs and subscription in subs:
                subs.remove(subscription)

    def publish(self, event: Event) -> int:
        """Deliver *event* to its subscribers and return how many ran cleanly."""

        event_type = type(event)
        with self._lock:
            subs = list(self._handlers.get(event_type, ()))

        delivered = 0
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(event)
            except Exception:
                self._logger.exception("Handler for %s failed", event_type.__name__)
                continue
            delivered += 1
        return delivered
