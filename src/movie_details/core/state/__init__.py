"""View state storage, merges and one-shot events."""

from . import merges
from .event_channel import Event, EventChannel
from .view_state_store import ViewStateStore

__all__ = [
    "merges",
    "Event",
    "EventChannel",
    "ViewStateStore",
]
