"""SQLAlchemy-backed lookup of push tokens."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session, sessionmaker

from notifier.domain.entities import RecipientFilter
from notifier.domain.errors import RecipientNotFound
from notifier.infrastructure.repositories import UserRepository


class SqlAlchemyTokenStore:
    """Token store reading the ``user`` table, one session per operation."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_token(self, user_id: str) -> str | None:
        with self._session_factory() as session:
            user = UserRepository(session).get(user_id)
        if user is None:
            raise RecipientNotFound(user_id)
        return user.fcm_token

    def query_tokens(self, predicate: RecipientFilter) -> Sequence[tuple[str, str | None]]:
        with self._session_factory() as session:
            users = UserRepository(session).list_by_field(predicate.field, predicate.value)
        return [(user.id, user.fcm_token) for user in users]

    def clear_tokens(self, tokens: Iterable[str]) -> int:
        with self._session_factory() as session:
            return UserRepository(session).clear_tokens(tokens)


__all__ = ["SqlAlchemyTokenStore"]
