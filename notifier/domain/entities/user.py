"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes of a user that can receive notifications."""

    id: str
    name: str
    role: str
    fcm_token: str | None = None
    created_at: datetime | None = None


__all__ = ["User"]
