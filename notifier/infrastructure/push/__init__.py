"""Push delivery adapters."""

from __future__ import annotations

import logging

from notifier.application.ports import PushTransport
from notifier.config import Settings

from .disabled import DisabledTransport
from .firebase import (
    FCM_MAX_MULTICAST_TOKENS,
    FirebaseTransport,
    classify_send_error,
    create_firebase_app,
)

logger = logging.getLogger(__name__)


def build_transport(settings: Settings) -> PushTransport:
    """Return the transport selected by ``settings``."""

    if not settings.push_enabled:
        logger.info("Push delivery disabled; notifications will be reported as failed")
        return DisabledTransport()
    return FirebaseTransport.from_settings(settings)


__all__ = [
    "DisabledTransport",
    "FCM_MAX_MULTICAST_TOKENS",
    "FirebaseTransport",
    "build_transport",
    "classify_send_error",
    "create_firebase_app",
]
