"""Endpoints that receive document-created triggers and fan out pushes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from notifier.application.ports import TokenStore
from notifier.application.use_cases.notifications import (
    DispatchEngine,
    notify_listing_created,
    notify_message_created,
)
from notifier.config import Settings, get_settings
from notifier.interfaces.api.dependencies import get_dispatch_engine, get_token_store
from notifier.interfaces.api.schemas import (
    DeliveryReportRead,
    ListingCreatedIn,
    MessageCreatedIn,
)

router = APIRouter(prefix="/events", tags=["events"])


@router.post("/messages", response_model=DeliveryReportRead, response_model_by_alias=True)
async def message_created(
    message: MessageCreatedIn,
    token_store: TokenStore = Depends(get_token_store),
    engine: DispatchEngine = Depends(get_dispatch_engine),
    settings: Settings = Depends(get_settings),
) -> DeliveryReportRead:
    """Notify the receiver of a newly created message."""

    report = await notify_message_created(
        message.to_event(), token_store=token_store, engine=engine, settings=settings
    )
    return DeliveryReportRead.from_report(report)


@router.post(
    "/halls/{hall_id}", response_model=DeliveryReportRead, response_model_by_alias=True
)
async def hall_created(
    hall_id: str,
    hall: ListingCreatedIn,
    token_store: TokenStore = Depends(get_token_store),
    engine: DispatchEngine = Depends(get_dispatch_engine),
    settings: Settings = Depends(get_settings),
) -> DeliveryReportRead:
    """Announce a newly created hall to every customer."""

    report = await notify_listing_created(
        hall.to_event(hall_id), token_store=token_store, engine=engine, settings=settings
    )
    return DeliveryReportRead.from_report(report)
