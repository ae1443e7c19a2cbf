"""Tests for the per-event notification pipelines."""

from __future__ import annotations

import logging

import pytest

from notifier.application.use_cases.notifications import (
    DispatchEngine,
    handle_event,
    notify_listing_created,
    notify_message_created,
)
from notifier.config import Settings
from notifier.domain.entities import FailureReason, ListingCreated, MessageCreated

pytestmark = pytest.mark.anyio


def _message(**overrides) -> MessageCreated:
    fields = {
        "sender_id": "s1",
        "receiver_id": "u1",
        "sender_name": "A",
        "receiver_name": "B",
        "content": "hello",
        "conversation_id": "c1",
    }
    fields.update(overrides)
    return MessageCreated(**fields)


LISTING = ListingCreated(id="hall-1", name="Azure Hall", city="Amman", price_per_hour=20)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://")


async def test_message_without_token_is_reported_no_token(
    make_token_store, make_transport, settings
) -> None:
    store = make_token_store({"u1": {"role": "customer", "token": None}})
    transport = make_transport()

    report = await notify_message_created(
        _message(), token_store=store, engine=DispatchEngine(transport), settings=settings
    )

    assert (report.success_count, report.failure_count) == (0, 1)
    assert report.results[0].reason is FailureReason.NO_TOKEN
    assert transport.call_count == 0


async def test_message_is_sent_to_receiver(make_token_store, make_transport, settings, caplog) -> None:
    store = make_token_store({"u1": {"role": "customer", "token": "tok-1"}})
    transport = make_transport()

    with caplog.at_level(logging.INFO):
        report = await notify_message_created(
            _message(), token_store=store, engine=DispatchEngine(transport), settings=settings
        )

    assert report.success_count == 1
    assert transport.single_calls == ["tok-1"]
    sent = transport.payloads[0]
    assert sent.title == "New message from A"
    assert sent.data["type"] == "message"
    assert "New message: A -> B" in caplog.text
    assert "sent=1 failed=0" in caplog.text


async def test_unknown_receiver_returns_empty_report(make_token_store, make_transport, settings) -> None:
    transport = make_transport()

    report = await notify_message_created(
        _message(), token_store=make_token_store({}), engine=DispatchEngine(transport), settings=settings
    )

    assert report.total == 0
    assert transport.call_count == 0


async def test_composer_error_is_contained(make_token_store, make_transport, settings, caplog) -> None:
    store = make_token_store({"u1": {"role": "customer", "token": "tok-1"}})
    transport = make_transport()

    with caplog.at_level(logging.ERROR):
        report = await notify_message_created(
            _message(sender_name=""),
            token_store=store,
            engine=DispatchEngine(transport),
            settings=settings,
        )

    assert report.total == 0
    assert transport.call_count == 0
    assert "Cannot compose MessageCreated notification" in caplog.text


async def test_listing_broadcasts_to_customers(make_token_store, make_transport, settings) -> None:
    users = {f"c{i:03d}": {"role": "customer", "token": f"tok-{i}"} for i in range(240)}
    users.update({f"n{i}": {"role": "customer", "token": None} for i in range(10)})
    users["owner"] = {"role": "owner", "token": "tok-owner"}
    transport = make_transport(rejected={f"tok-{i}" for i in range(5)})

    report = await notify_listing_created(
        LISTING,
        token_store=make_token_store(users),
        engine=DispatchEngine(transport),
        settings=settings,
    )

    assert len(transport.multicast_calls) == 1
    assert len(transport.multicast_calls[0]) == 240
    assert "tok-owner" not in transport.multicast_calls[0]
    assert (report.success_count, report.failure_count) == (235, 15)
    assert dict(transport.payloads[0].data) == {"type": "new_hall", "hallId": "hall-1"}


async def test_listing_without_customers_is_noop(make_token_store, make_transport, settings) -> None:
    transport = make_transport()

    report = await notify_listing_created(
        LISTING,
        token_store=make_token_store({"o": {"role": "owner", "token": "t"}}),
        engine=DispatchEngine(transport),
        settings=settings,
    )

    assert report.total == 0
    assert transport.call_count == 0


async def test_broken_store_returns_empty_report(make_token_store, make_transport, settings) -> None:
    report = await handle_event(
        LISTING,
        token_store=make_token_store(broken=True),
        engine=DispatchEngine(make_transport()),
        settings=settings,
    )

    assert report.total == 0


async def test_invalid_tokens_are_pruned_when_enabled(make_token_store, make_transport) -> None:
    store = make_token_store(
        {
            "c1": {"role": "customer", "token": "tok-1"},
            "c2": {"role": "customer", "token": "tok-2"},
        }
    )
    transport = make_transport(unregistered={"tok-2"})

    report = await handle_event(
        LISTING,
        token_store=store,
        engine=DispatchEngine(transport),
        settings=Settings(database_url="sqlite://", prune_invalid_tokens=True),
    )

    assert report.invalid_tokens == ["tok-2"]
    assert store.cleared == ["tok-2"]
    assert store.users["c2"]["token"] is None


async def test_invalid_tokens_kept_by_default(make_token_store, make_transport, settings) -> None:
    store = make_token_store({"c1": {"role": "customer", "token": "tok-1"}})

    await handle_event(
        LISTING,
        token_store=store,
        engine=DispatchEngine(make_transport(unregistered={"tok-1"})),
        settings=settings,
    )

    assert store.cleared == []


async def test_handle_event_routes_messages(make_token_store, make_transport, settings) -> None:
    store = make_token_store({"u1": {"role": "customer", "token": "tok-1"}})
    transport = make_transport()

    report = await handle_event(
        _message(), token_store=store, engine=DispatchEngine(transport), settings=settings
    )

    assert report.success_count == 1
    assert transport.single_calls == ["tok-1"]
