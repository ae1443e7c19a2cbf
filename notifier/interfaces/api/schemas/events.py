"""Pydantic models describing trigger payloads and delivery reports."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from notifier.domain.entities import (
    DeliveryReport,
    DeliveryStatus,
    FailureReason,
    ListingCreated,
    MessageCreated,
    TokenResult,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageCreatedIn(_CamelModel):
    """Document of a newly created chat message."""

    sender_id: str
    receiver_id: str
    sender_name: str
    receiver_name: str = ""
    content: str
    conversation_id: str
    message_id: str | None = Field(default=None, description="Message document id")

    def to_event(self) -> MessageCreated:
        return MessageCreated(
            sender_id=self.sender_id,
            receiver_id=self.receiver_id,
            sender_name=self.sender_name,
            receiver_name=self.receiver_name,
            content=self.content,
            conversation_id=self.conversation_id,
            message_id=self.message_id,
        )


class ListingCreatedIn(_CamelModel):
    """Document of a newly created hall listing."""

    name: str
    city: str
    price_per_hour: Decimal = Field(..., ge=0, description="Hourly price of the hall")

    def to_event(self, hall_id: str) -> ListingCreated:
        return ListingCreated(
            id=hall_id,
            name=self.name,
            city=self.city,
            price_per_hour=self.price_per_hour,
        )


class TokenResultRead(_CamelModel):
    """Outcome for a single recipient."""

    user_id: str
    token: str | None = None
    status: DeliveryStatus
    reason: FailureReason | None = None
    detail: str | None = None
    message_id: str | None = None

    @classmethod
    def from_result(cls, result: TokenResult) -> "TokenResultRead":
        return cls(
            user_id=result.user_id,
            token=result.token,
            status=result.status,
            reason=result.reason,
            detail=result.detail,
            message_id=result.message_id,
        )


class DeliveryReportRead(_CamelModel):
    """Delivery report returned to the trigger relay."""

    success_count: int
    failure_count: int
    results: list[TokenResultRead] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: DeliveryReport) -> "DeliveryReportRead":
        return cls(
            success_count=report.success_count,
            failure_count=report.failure_count,
            results=[TokenResultRead.from_result(result) for result in report.results],
        )


__all__ = [
    "DeliveryReportRead",
    "ListingCreatedIn",
    "MessageCreatedIn",
    "TokenResultRead",
]
