"""Use cases for managing users and their device tokens."""

from .register_token import register_token

__all__ = ["register_token"]
