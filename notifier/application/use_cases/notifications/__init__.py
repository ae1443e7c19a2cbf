"""Public helpers for composing and dispatching push notifications."""

from .composer import clip_text, compose, format_price
from .dispatch import DispatchEngine, iter_batches
from .events import handle_event, notify_listing_created, notify_message_created
from .recipients import DEFAULT_BROADCAST_FILTER, resolve_recipients

__all__ = [
    "clip_text",
    "compose",
    "format_price",
    "DispatchEngine",
    "iter_batches",
    "handle_event",
    "notify_listing_created",
    "notify_message_created",
    "DEFAULT_BROADCAST_FILTER",
    "resolve_recipients",
]
