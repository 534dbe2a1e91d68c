from .bus import Event, EventBus, Subscription
from .editor_events import EditCancelledEvent, EditSavedEvent

__all__ = [
    "Event",
    "EventBus",
    "Subscription",
    "EditSavedEvent",
    "EditCancelledEvent",
]
