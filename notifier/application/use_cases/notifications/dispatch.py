"""Fan-out dispatch of one payload to many push tokens."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TypeVar

import anyio

from notifier.application.ports import PushTransport
from notifier.domain.entities import (
    DeliveryReport,
    DeliveryStatus,
    FailureReason,
    NotificationPayload,
    Recipient,
    SendOutcome,
    TokenResult,
)
from notifier.domain.errors import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (position in the recipient list, token)
_Slot = tuple[int, str]


def iter_batches(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into consecutive chunks of at most ``size`` elements."""

    if size < 1:
        raise ValueError("Batch size must be at least 1")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


class DispatchEngine:
    """Deliver a payload to recipients in transport-sized batches.

    The engine keeps no state between calls. Batches are sent concurrently and
    their outcomes are written back by recipient position, so the report order
    never depends on which batch finished first.
    """

    def __init__(
        self,
        transport: PushTransport,
        *,
        max_concurrency: int = 4,
        retry_attempts: int = 0,
        retry_backoff: float = 0.5,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if retry_attempts < 0:
            raise ValueError("retry_attempts must not be negative")
        self._transport = transport
        self._max_concurrency = max_concurrency
        self._retry_attempts = retry_attempts
        self._retry_backoff = retry_backoff

    async def dispatch(
        self, payload: NotificationPayload, recipients: Iterable[Recipient]
    ) -> DeliveryReport:
        """Send ``payload`` to every deliverable recipient and report per token."""

        recipients = list(recipients)
        if not recipients:
            report = DeliveryReport.empty()
            logger.info("Dispatch %s: %s", payload.type, report.summary())
            return report

        results: list[TokenResult | None] = [None] * len(recipients)
        pending: list[_Slot] = []
        for index, recipient in enumerate(recipients):
            if recipient.is_deliverable:
                pending.append((index, recipient.token))
            else:
                results[index] = TokenResult(
                    user_id=recipient.user_id,
                    token=recipient.token or None,
                    status=DeliveryStatus.FAILED,
                    reason=FailureReason.NO_TOKEN,
                )

        if len(pending) == 1:
            await self._deliver(pending, payload, recipients, results, single=True)
        elif pending:
            limiter = anyio.CapacityLimiter(self._max_concurrency)
            batches = iter_batches(pending, self._transport.max_batch_size)
            logger.debug(
                "Sending %s tokens in %s batches", len(pending), len(batches)
            )
            async with anyio.create_task_group() as task_group:
                for batch in batches:
                    task_group.start_soon(
                        self._deliver_limited, limiter, batch, payload, recipients, results
                    )

        report = DeliveryReport.from_results(
            result for result in results if result is not None
        )
        logger.info("Dispatch %s: %s", payload.type, report.summary())
        return report

    async def _deliver_limited(
        self,
        limiter: anyio.CapacityLimiter,
        batch: list[_Slot],
        payload: NotificationPayload,
        recipients: list[Recipient],
        results: list[TokenResult | None],
    ) -> None:
        async with limiter:
            await self._deliver(batch, payload, recipients, results, single=False)

    async def _deliver(
        self,
        batch: list[_Slot],
        payload: NotificationPayload,
        recipients: list[Recipient],
        results: list[TokenResult | None],
        *,
        single: bool,
    ) -> None:
        tokens = [token for _, token in batch]
        try:
            outcomes = await self._send_with_retry(tokens, payload, single=single)
        except Exception as exc:
            detail = str(exc) or type(exc).__name__
            outcomes = [
                SendOutcome.failed(FailureReason.TRANSPORT_ERROR, detail) for _ in tokens
            ]

        for (index, token), outcome in zip(batch, outcomes):
            results[index] = _to_result(recipients[index].user_id, token, outcome)

    async def _send_with_retry(
        self, tokens: list[str], payload: NotificationPayload, *, single: bool
    ) -> Sequence[SendOutcome]:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._send(tokens, payload, single=single)
            except TransportError as exc:
                if attempt > self._retry_attempts:
                    logger.error(
                        "Transport failed for batch of %s tokens: %s", len(tokens), exc
                    )
                    raise
                logger.warning(
                    "Transport failed for batch of %s tokens (attempt %s), retrying: %s",
                    len(tokens),
                    attempt,
                    exc,
                )
            except Exception:
                logger.exception("Unexpected transport failure for batch of %s tokens", len(tokens))
                raise
            await anyio.sleep(self._retry_backoff * attempt)

    async def _send(
        self, tokens: list[str], payload: NotificationPayload, *, single: bool
    ) -> Sequence[SendOutcome]:
        if single:
            return [await self._transport.send_one(tokens[0], payload)]
        outcomes = list(await self._transport.send_multicast(tokens, payload))
        if len(outcomes) != len(tokens):
            raise TransportError(
                f"Transport returned {len(outcomes)} outcomes for {len(tokens)} tokens"
            )
        return outcomes


def _to_result(user_id: str, token: str, outcome: SendOutcome) -> TokenResult:
    if outcome.success:
        return TokenResult(
            user_id=user_id,
            token=token,
            status=DeliveryStatus.SENT,
            message_id=outcome.message_id,
        )
    return TokenResult(
        user_id=user_id,
        token=token,
        status=DeliveryStatus.FAILED,
        reason=outcome.reason or FailureReason.REJECTED,
        detail=outcome.detail,
    )


__all__ = ["DispatchEngine", "iter_batches"]
