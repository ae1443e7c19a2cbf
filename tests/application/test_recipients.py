"""Tests for resolving event audiences."""

from __future__ import annotations

import logging

from notifier.application.use_cases.notifications import resolve_recipients
from notifier.domain.entities import ListingCreated, MessageCreated, Recipient, RecipientFilter

MESSAGE = MessageCreated(
    sender_id="s1",
    receiver_id="u1",
    sender_name="A",
    receiver_name="B",
    content="hello",
    conversation_id="c1",
)
LISTING = ListingCreated(id="h1", name="Azure Hall", city="Amman", price_per_hour=20)


def test_message_resolves_single_receiver(make_token_store) -> None:
    store = make_token_store({"u1": {"role": "owner", "token": "tok-1"}})

    assert resolve_recipients(MESSAGE, store) == [Recipient(user_id="u1", token="tok-1")]


def test_message_receiver_without_token(make_token_store) -> None:
    store = make_token_store({"u1": {"role": "customer", "token": None}})

    assert resolve_recipients(MESSAGE, store) == [Recipient(user_id="u1", token=None)]


def test_unknown_receiver_yields_no_recipients(make_token_store, caplog) -> None:
    with caplog.at_level(logging.INFO):
        assert resolve_recipients(MESSAGE, make_token_store({})) == []

    assert "Receiver not found: u1" in caplog.text


def test_listing_resolves_matching_role(make_token_store) -> None:
    store = make_token_store(
        {
            "c2": {"role": "customer", "token": "tok-c2"},
            "o1": {"role": "owner", "token": "tok-o1"},
            "c1": {"role": "customer", "token": ""},
        }
    )

    recipients = resolve_recipients(LISTING, store)

    assert recipients == [
        Recipient(user_id="c1", token=None),
        Recipient(user_id="c2", token="tok-c2"),
    ]


def test_listing_uses_custom_filter(make_token_store) -> None:
    store = make_token_store({"o1": {"role": "owner", "token": "tok-o1"}})

    recipients = resolve_recipients(
        LISTING, store, broadcast_filter=RecipientFilter(field="role", value="owner")
    )

    assert [recipient.user_id for recipient in recipients] == ["o1"]


def test_listing_without_matches_is_empty(make_token_store) -> None:
    store = make_token_store({"o1": {"role": "owner", "token": "tok-o1"}})

    assert resolve_recipients(LISTING, store) == []


def test_store_failure_is_converted_to_empty_result(make_token_store, caplog) -> None:
    store = make_token_store(broken=True)

    with caplog.at_level(logging.ERROR):
        assert resolve_recipients(MESSAGE, store) == []
        assert resolve_recipients(LISTING, store) == []

    assert "Recipient lookup failed for MessageCreated" in caplog.text
