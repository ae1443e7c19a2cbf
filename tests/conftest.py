"""Shared fixtures and in-memory collaborators for the test suite."""

from __future__ import annotations

import pathlib
import sys
from collections.abc import Callable, Iterable, Sequence

import anyio
import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from notifier.domain.entities import (  # noqa: E402
    FailureReason,
    NotificationPayload,
    RecipientFilter,
    SendOutcome,
)
from notifier.domain.errors import RecipientNotFound, TransportError  # noqa: E402


class RecordingTransport:
    """Transport double that records calls and scripts per-token outcomes."""

    def __init__(
        self,
        max_batch_size: int = 500,
        *,
        rejected: Iterable[str] = (),
        unregistered: Iterable[str] = (),
        failing_batches: Iterable[str] = (),
        fail_first_calls: int = 0,
        delay: Callable[[Sequence[str]], float] | None = None,
    ) -> None:
        self.max_batch_size = max_batch_size
        self.rejected = set(rejected)
        self.unregistered = set(unregistered)
        # A batch containing any of these tokens fails outright.
        self.failing_batches = set(failing_batches)
        self.fail_first_calls = fail_first_calls
        self.delay = delay
        self.single_calls: list[str] = []
        self.multicast_calls: list[list[str]] = []
        self.payloads: list[NotificationPayload] = []

    @property
    def call_count(self) -> int:
        return len(self.single_calls) + len(self.multicast_calls)

    async def send_one(self, token: str, payload: NotificationPayload) -> SendOutcome:
        self.single_calls.append(token)
        self.payloads.append(payload)
        self._maybe_fail([token])
        return self._outcome(token)

    async def send_multicast(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> Sequence[SendOutcome]:
        self.multicast_calls.append(list(tokens))
        self.payloads.append(payload)
        if self.delay is not None:
            await anyio.sleep(self.delay(tokens))
        self._maybe_fail(tokens)
        return [self._outcome(token) for token in tokens]

    def _maybe_fail(self, tokens: Sequence[str]) -> None:
        if self.fail_first_calls > 0:
            self.fail_first_calls -= 1
            raise TransportError("service unavailable", code="unavailable")
        if self.failing_batches.intersection(tokens):
            raise TransportError("authentication failed", code="unauthenticated")

    def _outcome(self, token: str) -> SendOutcome:
        if token in self.unregistered:
            return SendOutcome.failed(FailureReason.UNREGISTERED, "token not registered")
        if token in self.rejected:
            return SendOutcome.failed(FailureReason.REJECTED, "invalid token")
        return SendOutcome.sent(f"msg-{token}")


class InMemoryTokenStore:
    """Token store double keyed by user id."""

    def __init__(
        self,
        users: dict[str, dict[str, str | None]] | None = None,
        *,
        broken: bool = False,
    ) -> None:
        self.users = users or {}
        self.broken = broken
        self.cleared: list[str] = []

    def get_token(self, user_id: str) -> str | None:
        if self.broken:
            raise RuntimeError("token store unavailable")
        if user_id not in self.users:
            raise RecipientNotFound(user_id)
        return self.users[user_id].get("token")

    def query_tokens(self, predicate: RecipientFilter) -> list[tuple[str, str | None]]:
        if self.broken:
            raise RuntimeError("token store unavailable")
        return [
            (user_id, data.get("token"))
            for user_id, data in sorted(self.users.items())
            if data.get(predicate.field) == predicate.value
        ]

    def clear_tokens(self, tokens: Iterable[str]) -> int:
        targets = set(tokens)
        cleared = 0
        for data in self.users.values():
            if data.get("token") in targets:
                self.cleared.append(data["token"])
                data["token"] = None
                cleared += 1
        return cleared


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def payload() -> NotificationPayload:
    return NotificationPayload(
        title="🎉 New Hall Available!",
        body="Azure Hall in Amman - 20 JOD/hr",
        data={"type": "new_hall", "hallId": "hall-1"},
    )


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def make_token_store() -> Callable[..., InMemoryTokenStore]:
    return InMemoryTokenStore
