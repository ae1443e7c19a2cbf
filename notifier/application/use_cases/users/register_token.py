"""Use case for registering a user's push token."""

from sqlalchemy.orm import Session

from notifier.domain.entities import User
from notifier.infrastructure.repositories import UserRepository


def register_token(
    session: Session,
    *,
    user_id: str,
    token: str | None,
    name: str | None = None,
    role: str | None = None,
) -> User:
    """Store ``token`` for ``user_id``, creating the user when it is unknown."""

    repository = UserRepository(session)
    token = (token or "").strip() or None

    if repository.get(user_id) is not None:
        return repository.update_token(user_id, token)

    if not role:
        raise ValueError("A role is required to create a new user")

    user = User(id=user_id, name=name or "", role=role, fcm_token=token)
    return repository.create(user)
