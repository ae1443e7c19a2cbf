"""Tests for registering push tokens."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from notifier.application.use_cases.users import register_token
from notifier.infrastructure.database import initialize_database


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    initialize_database(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as db:
        yield db
    engine.dispose()


def test_register_token_creates_user(session) -> None:
    user = register_token(session, user_id="c1", token=" tok-1 ", name="Lina", role="customer")

    assert (user.id, user.role, user.fcm_token) == ("c1", "customer", "tok-1")


def test_register_token_updates_existing_user(session) -> None:
    register_token(session, user_id="c1", token="tok-1", role="customer")

    user = register_token(session, user_id="c1", token="tok-2")

    assert user.fcm_token == "tok-2"
    assert user.role == "customer"


def test_register_token_clears_blank_token(session) -> None:
    register_token(session, user_id="c1", token="tok-1", role="customer")

    assert register_token(session, user_id="c1", token="").fcm_token is None


def test_register_token_requires_role_for_new_user(session) -> None:
    with pytest.raises(ValueError):
        register_token(session, user_id="c1", token="tok-1")
