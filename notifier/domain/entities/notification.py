"""Domain entity representing a composed push notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class NotificationPayload:
    """Title, body and routing data shared by every recipient of a fan-out."""

    title: str
    body: str
    data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mapping so a payload reused across batches cannot drift.
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @property
    def type(self) -> str | None:
        """Return the ``type`` discriminator carried in ``data``."""

        return self.data.get("type")

    def to_wire(
        self, *, token: str | None = None, tokens: list[str] | None = None
    ) -> dict[str, Any]:
        """Return the transport wire shape addressed to ``token`` or ``tokens``."""

        if (token is None) == (tokens is None):
            raise ValueError("Exactly one of token or tokens must be provided")
        message: dict[str, Any] = {
            "title": self.title,
            "body": self.body,
            "data": dict(self.data),
        }
        if token is not None:
            message["token"] = token
        else:
            message["tokens"] = list(tokens or [])
        return message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotificationPayload):
            return NotImplemented
        return (
            self.title == other.title
            and self.body == other.body
            and dict(self.data) == dict(other.data)
        )

    def __hash__(self) -> int:
        return hash((self.title, self.body, tuple(sorted(self.data.items()))))


__all__ = ["NotificationPayload"]
