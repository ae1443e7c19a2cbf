"""Domain events that trigger push notifications."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class MessageCreated:
    """A chat message was stored and its receiver should be notified."""

    sender_id: str
    receiver_id: str
    sender_name: str
    receiver_name: str
    content: str
    conversation_id: str
    message_id: str | None = None


@dataclass(frozen=True)
class ListingCreated:
    """A new hall listing was published and customers should hear about it."""

    id: str
    name: str
    city: str
    price_per_hour: int | float | Decimal


Event = Union[MessageCreated, ListingCreated]


__all__ = ["Event", "ListingCreated", "MessageCreated"]
