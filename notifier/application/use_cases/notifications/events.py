"""Per-event notification pipelines.

Each handler is the isolation boundary of one event: whatever goes wrong
while composing, resolving or delivering is logged and turned into an empty
or partial :class:`DeliveryReport`; nothing propagates to the caller.
"""

from __future__ import annotations

import logging
from functools import partial

from anyio import to_thread

from notifier.application.ports import TokenStore
from notifier.config import Settings, get_settings
from notifier.domain.entities import (
    DeliveryReport,
    Event,
    ListingCreated,
    MessageCreated,
    RecipientFilter,
)
from notifier.domain.errors import ComposerError

from .composer import compose
from .dispatch import DispatchEngine
from .recipients import resolve_recipients

logger = logging.getLogger(__name__)


async def notify_message_created(
    event: MessageCreated,
    *,
    token_store: TokenStore,
    engine: DispatchEngine,
    settings: Settings | None = None,
) -> DeliveryReport:
    """Notify the receiver of a new chat message."""

    logger.info("New message: %s -> %s", event.sender_name, event.receiver_name)
    return await _run_pipeline(
        event, token_store=token_store, engine=engine, settings=settings
    )


async def notify_listing_created(
    event: ListingCreated,
    *,
    token_store: TokenStore,
    engine: DispatchEngine,
    settings: Settings | None = None,
) -> DeliveryReport:
    """Announce a new hall listing to every matching customer."""

    logger.info("New hall: %s in %s", event.name, event.city)
    return await _run_pipeline(
        event, token_store=token_store, engine=engine, settings=settings
    )


async def handle_event(
    event: Event,
    *,
    token_store: TokenStore,
    engine: DispatchEngine,
    settings: Settings | None = None,
) -> DeliveryReport:
    """Route ``event`` to its handler."""

    if isinstance(event, MessageCreated):
        return await notify_message_created(
            event, token_store=token_store, engine=engine, settings=settings
        )
    if isinstance(event, ListingCreated):
        return await notify_listing_created(
            event, token_store=token_store, engine=engine, settings=settings
        )
    logger.error("Unsupported event type: %s", type(event).__name__)
    return DeliveryReport.empty()


async def _run_pipeline(
    event: Event,
    *,
    token_store: TokenStore,
    engine: DispatchEngine,
    settings: Settings | None,
) -> DeliveryReport:
    settings = settings or get_settings()

    try:
        payload = compose(
            event,
            max_body_length=settings.body_max_length,
            currency=settings.currency,
        )
    except ComposerError as exc:
        logger.error("Cannot compose %s notification: %s", type(event).__name__, exc)
        return DeliveryReport.empty()

    broadcast_filter = RecipientFilter(
        field=settings.broadcast_role_field, value=settings.broadcast_role
    )
    recipients = await to_thread.run_sync(
        partial(
            resolve_recipients,
            event,
            token_store,
            broadcast_filter=broadcast_filter,
        )
    )
    if not recipients:
        logger.info("No recipients for %s", type(event).__name__)
        return DeliveryReport.empty()

    try:
        report = await engine.dispatch(payload, recipients)
    except Exception:
        logger.exception("Dispatch failed for %s", type(event).__name__)
        return DeliveryReport.empty()

    if settings.prune_invalid_tokens and report.invalid_tokens:
        await _prune_tokens(token_store, report.invalid_tokens)
    return report


async def _prune_tokens(token_store: TokenStore, tokens: list[str]) -> None:
    try:
        cleared = await to_thread.run_sync(token_store.clear_tokens, tokens)
    except Exception:
        logger.exception("Failed to clear %s unregistered tokens", len(tokens))
        return
    logger.info("Cleared %s unregistered tokens", cleared)


__all__ = ["handle_event", "notify_listing_created", "notify_message_created"]
