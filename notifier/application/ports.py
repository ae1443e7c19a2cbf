"""Contracts for the collaborators injected into the notification use cases."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from notifier.domain.entities import NotificationPayload, RecipientFilter, SendOutcome


@runtime_checkable
class TokenStore(Protocol):
    """Lookup of push tokens for users.

    Tokens may be stale; callers never validate their format.
    """

    def get_token(self, user_id: str) -> str | None:
        """Return the token of ``user_id``; raise ``RecipientNotFound`` if unknown."""
        ...

    def query_tokens(self, predicate: RecipientFilter) -> Sequence[tuple[str, str | None]]:
        """Return ``(user_id, token)`` pairs for every user matching ``predicate``."""
        ...

    def clear_tokens(self, tokens: Iterable[str]) -> int:
        """Forget ``tokens`` and return how many users were updated."""
        ...


@runtime_checkable
class PushTransport(Protocol):
    """Network delivery of push notifications."""

    max_batch_size: int

    async def send_one(self, token: str, payload: NotificationPayload) -> SendOutcome:
        ...

    async def send_multicast(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> Sequence[SendOutcome]:
        """Send to ``tokens`` and return outcomes aligned with their order.

        A failure that affects the whole call raises ``TransportError``.
        """
        ...


__all__ = ["PushTransport", "TokenStore"]
