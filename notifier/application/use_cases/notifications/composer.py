"""Build push payloads from domain events."""

from __future__ import annotations

import unicodedata
from decimal import Decimal, InvalidOperation
from typing import Final

from notifier.domain.entities import (
    Event,
    ListingCreated,
    MessageCreated,
    NotificationPayload,
)
from notifier.domain.errors import ComposerError

DEFAULT_BODY_MAX_LENGTH: Final[int] = 100
DEFAULT_CURRENCY: Final[str] = "JOD"

MESSAGE_TYPE: Final[str] = "message"
NEW_HALL_TYPE: Final[str] = "new_hall"
NEW_HALL_TITLE: Final[str] = "🎉 New Hall Available!"

_ZERO_WIDTH_JOINER: Final[str] = "\u200d"


def compose(
    event: Event,
    *,
    max_body_length: int = DEFAULT_BODY_MAX_LENGTH,
    currency: str = DEFAULT_CURRENCY,
) -> NotificationPayload:
    """Return the notification payload for ``event``.

    The result depends only on the event fields and the keyword arguments, so
    composing the same event twice yields equal payloads.
    """

    if isinstance(event, MessageCreated):
        return _compose_message(event, max_body_length)
    if isinstance(event, ListingCreated):
        return _compose_listing(event, max_body_length, currency)
    raise ComposerError(f"Unsupported event type: {type(event).__name__}")


def clip_text(text: str, limit: int) -> str:
    """Clip ``text`` to at most ``limit`` characters.

    Slicing happens on code points, so multi-byte characters stay whole. A cut
    that would land inside a character sequence (a base with combining marks,
    a joined or modified emoji, a flag pair) backs off to where the sequence
    starts.
    """

    if limit < 0:
        raise ValueError("limit must not be negative")
    if len(text) <= limit:
        return text
    end = limit
    while end > 0 and _joins_previous(text, end):
        end -= 1
    return text[:end]


def _is_regional_indicator(char: str) -> bool:
    return "\U0001f1e6" <= char <= "\U0001f1ff"


def _joins_previous(text: str, index: int) -> bool:
    """Return ``True`` when ``text[index]`` belongs to the character before it."""

    char = text[index]
    if unicodedata.combining(char) or char == _ZERO_WIDTH_JOINER:
        return True
    # Variation selectors and skin tone modifiers.
    if "\ufe00" <= char <= "\ufe0f" or "\U0001f3fb" <= char <= "\U0001f3ff":
        return True
    if text[index - 1] == _ZERO_WIDTH_JOINER:
        return True
    if _is_regional_indicator(char):
        # Flags are pairs; an odd run before the cut means this one is a second half.
        run = 0
        while index - run - 1 >= 0 and _is_regional_indicator(text[index - run - 1]):
            run += 1
        return run % 2 == 1
    return False


def format_price(value: object) -> str:
    """Render a price without a trailing ``.0`` for whole amounts."""

    if isinstance(value, bool) or value is None:
        raise ComposerError(f"Invalid price: {value!r}")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ComposerError(f"Invalid price: {value!r}") from exc
    if not amount.is_finite():
        raise ComposerError(f"Invalid price: {value!r}")
    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")


def _compose_message(event: MessageCreated, max_body_length: int) -> NotificationPayload:
    sender_name = _required(event.sender_name, "sender_name")
    content = _required_text(event.content, "content")
    conversation_id = _required(event.conversation_id, "conversation_id")
    sender_id = _required(event.sender_id, "sender_id")
    _required(event.receiver_id, "receiver_id")

    return NotificationPayload(
        title=f"New message from {sender_name}",
        body=clip_text(content, max_body_length),
        data={
            "type": MESSAGE_TYPE,
            "conversationId": conversation_id,
            "senderId": sender_id,
        },
    )


def _compose_listing(
    event: ListingCreated, max_body_length: int, currency: str
) -> NotificationPayload:
    hall_id = _required(event.id, "id")
    name = _required(event.name, "name")
    city = _required(event.city, "city")
    price = format_price(event.price_per_hour)

    return NotificationPayload(
        title=NEW_HALL_TITLE,
        body=clip_text(f"{name} in {city} - {price} {currency}/hr", max_body_length),
        data={"type": NEW_HALL_TYPE, "hallId": hall_id},
    )


def _required(value: object, name: str) -> str:
    if value is None or not str(value).strip():
        raise ComposerError(f"Missing required field: {name}")
    return str(value)


def _required_text(value: object, name: str) -> str:
    # Message content may be whitespace, only absence is rejected.
    if not isinstance(value, str):
        raise ComposerError(f"Missing required field: {name}")
    return value


__all__ = ["clip_text", "compose", "format_price"]
