"""Transport used when push delivery is switched off."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from notifier.domain.entities import NotificationPayload, SendOutcome
from notifier.domain.errors import TransportError

logger = logging.getLogger(__name__)


class DisabledTransport:
    """Refuse every send so reports show the notification was not delivered."""

    max_batch_size: int = 500

    async def send_one(self, token: str, payload: NotificationPayload) -> SendOutcome:
        logger.debug("Push disabled; dropping %s notification", payload.type)
        raise TransportError("push delivery disabled", code="disabled")

    async def send_multicast(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> Sequence[SendOutcome]:
        logger.debug(
            "Push disabled; dropping %s notification for %s tokens", payload.type, len(tokens)
        )
        raise TransportError("push delivery disabled", code="disabled")


__all__ = ["DisabledTransport"]
