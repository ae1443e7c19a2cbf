"""Domain error types."""

from __future__ import annotations


class NotificationError(Exception):
    """Base error for the notification pipeline."""


class RecipientNotFound(NotificationError):
    """The token store has no user with the requested identifier."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User with id {user_id} not found")


class ComposerError(NotificationError):
    """An event is missing fields required to build its notification."""


class TransportError(NotificationError):
    """A push transport call failed for a whole batch."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        self.code = code
        super().__init__(message)


__all__ = [
    "ComposerError",
    "NotificationError",
    "RecipientNotFound",
    "TransportError",
]
