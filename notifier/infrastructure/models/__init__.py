"""ORM models used by the application infrastructure."""

from .user import UserModel

__all__ = ["UserModel"]
