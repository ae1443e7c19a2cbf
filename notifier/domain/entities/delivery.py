"""Domain entities describing the outcome of a dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class DeliveryStatus(str, Enum):
    """Final state of a single token within a dispatch."""

    SENT = "sent"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Why a token was not delivered."""

    NO_TOKEN = "no_token"
    TRANSPORT_ERROR = "transport_error"
    UNREGISTERED = "unregistered"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SendOutcome:
    """Per-token result reported by a push transport."""

    success: bool
    message_id: str | None = None
    reason: FailureReason | None = None
    detail: str | None = None

    @classmethod
    def sent(cls, message_id: str | None = None) -> "SendOutcome":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str | None = None) -> "SendOutcome":
        return cls(success=False, reason=reason, detail=detail)


@dataclass(frozen=True)
class TokenResult:
    """Outcome recorded for one recipient of a dispatch."""

    user_id: str
    token: str | None
    status: DeliveryStatus
    reason: FailureReason | None = None
    detail: str | None = None
    message_id: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is DeliveryStatus.SENT


@dataclass(frozen=True)
class DeliveryReport:
    """Aggregated per-token outcomes of one dispatch invocation.

    ``results`` keeps the order of the recipients handed to the dispatch, so
    ``results[i]`` always describes ``recipients[i]``.
    """

    success_count: int = 0
    failure_count: int = 0
    results: tuple[TokenResult, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "DeliveryReport":
        """Return a report for a dispatch that had nobody to notify."""

        return cls()

    @classmethod
    def from_results(cls, results: Iterable[TokenResult]) -> "DeliveryReport":
        """Build a report whose counters are derived from ``results``."""

        ordered = tuple(results)
        sent = sum(1 for result in ordered if result.succeeded)
        return cls(
            success_count=sent,
            failure_count=len(ordered) - sent,
            results=ordered,
        )

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def invalid_tokens(self) -> list[str]:
        """Return tokens the transport reported as no longer registered."""

        return [
            result.token
            for result in self.results
            if result.reason is FailureReason.UNREGISTERED and result.token
        ]

    def summary(self) -> str:
        return f"sent={self.success_count} failed={self.failure_count}"


__all__ = [
    "DeliveryReport",
    "DeliveryStatus",
    "FailureReason",
    "SendOutcome",
    "TokenResult",
]
