"""Domain entities describing who receives a notification."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Recipient:
    """User targeted by a notification together with its delivery token."""

    user_id: str
    token: str | None = None

    @property
    def is_deliverable(self) -> bool:
        """Return ``True`` when the recipient has a non-empty token."""

        return bool(self.token and self.token.strip())


@dataclass(frozen=True)
class RecipientFilter:
    """Equality predicate used to select broadcast audiences."""

    field: str
    value: str


__all__ = ["Recipient", "RecipientFilter"]
