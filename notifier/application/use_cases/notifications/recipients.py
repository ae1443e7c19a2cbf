"""Resolve the audience of a domain event."""

from __future__ import annotations

import logging

from notifier.application.ports import TokenStore
from notifier.domain.entities import (
    Event,
    ListingCreated,
    MessageCreated,
    Recipient,
    RecipientFilter,
)
from notifier.domain.errors import RecipientNotFound

logger = logging.getLogger(__name__)

DEFAULT_BROADCAST_FILTER = RecipientFilter(field="role", value="customer")


def resolve_recipients(
    event: Event,
    token_store: TokenStore,
    *,
    broadcast_filter: RecipientFilter = DEFAULT_BROADCAST_FILTER,
) -> list[Recipient]:
    """Return the recipients of ``event`` in a stable order.

    Lookup failures never escape: an unknown receiver or a failing store both
    produce an empty list so the caller can short-circuit with a no-op report.
    """

    try:
        if isinstance(event, MessageCreated):
            return _resolve_receiver(event, token_store)
        if isinstance(event, ListingCreated):
            return _resolve_audience(broadcast_filter, token_store)
    except Exception:
        logger.exception("Recipient lookup failed for %s", type(event).__name__)
        return []

    raise TypeError(f"Unsupported event type: {type(event).__name__}")


def _resolve_receiver(event: MessageCreated, token_store: TokenStore) -> list[Recipient]:
    try:
        token = token_store.get_token(event.receiver_id)
    except RecipientNotFound:
        logger.info("Receiver not found: %s", event.receiver_id)
        return []
    return [Recipient(user_id=event.receiver_id, token=token or None)]


def _resolve_audience(
    predicate: RecipientFilter, token_store: TokenStore
) -> list[Recipient]:
    rows = token_store.query_tokens(predicate)
    recipients = [Recipient(user_id=user_id, token=token or None) for user_id, token in rows]
    if not recipients:
        logger.info("No users found where %s == %r", predicate.field, predicate.value)
    return recipients


__all__ = ["DEFAULT_BROADCAST_FILTER", "resolve_recipients"]
