"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from notifier.domain.entities import User
from notifier.infrastructure.models import UserModel

FILTERABLE_FIELDS: frozenset[str] = frozenset({"id", "name", "role"})


class UserRepository:
    """Provide read and token maintenance operations for users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            name=user.name,
            role=user.role,
            fcm_token=user.fcm_token,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_token(self, user_id: str, token: str | None) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.fcm_token = token
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_by_field(self, field: str, value: str) -> Sequence[User]:
        """Return users whose ``field`` equals ``value`` ordered by id."""

        if field not in FILTERABLE_FIELDS:
            msg = f"Cannot filter users by '{field}'"
            raise ValueError(msg)
        column = getattr(UserModel, field)
        query = (
            self.session.query(UserModel)
            .filter(column == value)
            .order_by(UserModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def clear_tokens(self, tokens: Iterable[str]) -> int:
        """Set ``fcm_token`` to ``NULL`` for every user holding one of ``tokens``."""

        unique = sorted({token for token in tokens if token})
        if not unique:
            return 0
        updated = (
            self.session.query(UserModel)
            .filter(UserModel.fcm_token.in_(unique))
            .update({UserModel.fcm_token: None}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated or 0)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            role=model.role,
            fcm_token=model.fcm_token,
            created_at=model.created_at,
        )


__all__ = ["FILTERABLE_FIELDS", "UserRepository"]
