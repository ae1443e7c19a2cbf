"""Domain entities exposed by the application."""

from .delivery import (
    DeliveryReport,
    DeliveryStatus,
    FailureReason,
    SendOutcome,
    TokenResult,
)
from .events import Event, ListingCreated, MessageCreated
from .notification import NotificationPayload
from .recipient import Recipient, RecipientFilter
from .user import User

__all__ = [
    "DeliveryReport",
    "DeliveryStatus",
    "FailureReason",
    "SendOutcome",
    "TokenResult",
    "Event",
    "ListingCreated",
    "MessageCreated",
    "NotificationPayload",
    "Recipient",
    "RecipientFilter",
    "User",
]
