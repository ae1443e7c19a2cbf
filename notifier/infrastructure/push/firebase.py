"""Push delivery through Firebase Cloud Messaging."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import partial
from typing import Any, Final

import firebase_admin
from anyio import to_thread
from firebase_admin import credentials, exceptions, messaging

from notifier.config import Settings
from notifier.domain.entities import FailureReason, NotificationPayload, SendOutcome
from notifier.domain.errors import TransportError

logger = logging.getLogger(__name__)

# FCM rejects multicast messages addressed to more tokens than this.
FCM_MAX_MULTICAST_TOKENS: Final[int] = 500

_REJECTED_ERRORS: tuple[type[Exception], ...] = (
    messaging.SenderIdMismatchError,
    exceptions.InvalidArgumentError,
)


def create_firebase_app(settings: Settings) -> firebase_admin.App:
    """Initialize the named Firebase app described by ``settings``.

    An app already registered under the same name is reused.
    """

    name = settings.firebase_app_name
    try:
        return firebase_admin.get_app(name)
    except ValueError:
        pass
    if not settings.google_application_credentials:
        raise TransportError("No Firebase service account configured")
    credential = credentials.Certificate(settings.google_application_credentials)
    app = firebase_admin.initialize_app(credential, name=name)
    logger.info("Firebase app '%s' initialized", name)
    return app


def _mask(token: str) -> str:
    return f"{token[:20]}..."


def classify_send_error(exc: Exception | None) -> SendOutcome:
    """Map a per-token FCM error to a failed :class:`SendOutcome`."""

    if exc is None:
        return SendOutcome.failed(FailureReason.TRANSPORT_ERROR, "unknown error")
    detail = str(exc) or type(exc).__name__
    if isinstance(exc, messaging.UnregisteredError):
        return SendOutcome.failed(FailureReason.UNREGISTERED, detail)
    if isinstance(exc, _REJECTED_ERRORS):
        return SendOutcome.failed(FailureReason.REJECTED, detail)
    return SendOutcome.failed(FailureReason.TRANSPORT_ERROR, detail)


class FirebaseTransport:
    """Send notifications with the Firebase Admin SDK.

    The SDK is blocking, so every call runs in a worker thread.
    """

    max_batch_size: int = FCM_MAX_MULTICAST_TOKENS

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        self._app = app

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirebaseTransport":
        return cls(create_firebase_app(settings))

    async def send_one(self, token: str, payload: NotificationPayload) -> SendOutcome:
        wire = payload.to_wire(token=token)
        message = messaging.Message(
            notification=_notification(wire), data=wire["data"], token=wire["token"]
        )
        try:
            message_id = await to_thread.run_sync(
                partial(messaging.send, message, app=self._app)
            )
        except (messaging.UnregisteredError, *_REJECTED_ERRORS) as exc:
            logger.warning("Push rejected for token %s: %s", _mask(token), exc)
            return classify_send_error(exc)
        except exceptions.FirebaseError as exc:
            raise TransportError(str(exc), code=_error_code(exc)) from exc

        logger.debug("Push sent to token %s", _mask(token))
        return SendOutcome.sent(message_id)

    async def send_multicast(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> Sequence[SendOutcome]:
        if not tokens:
            return []
        if len(tokens) > self.max_batch_size:
            raise ValueError(
                f"Multicast batch of {len(tokens)} exceeds {self.max_batch_size} tokens"
            )
        wire = payload.to_wire(tokens=list(tokens))
        message = messaging.MulticastMessage(
            tokens=wire["tokens"], notification=_notification(wire), data=wire["data"]
        )
        try:
            response = await to_thread.run_sync(
                partial(messaging.send_each_for_multicast, message, app=self._app)
            )
        except exceptions.FirebaseError as exc:
            raise TransportError(str(exc), code=_error_code(exc)) from exc

        outcomes: list[SendOutcome] = []
        for token, item in zip(tokens, response.responses):
            if item.success:
                outcomes.append(SendOutcome.sent(item.message_id))
                continue
            logger.warning("Push failed for token %s: %s", _mask(token), item.exception)
            outcomes.append(classify_send_error(item.exception))
        return outcomes


def _notification(wire: dict[str, Any]) -> messaging.Notification:
    return messaging.Notification(title=wire["title"], body=wire["body"])


def _error_code(exc: Any) -> str | None:
    code = getattr(exc, "code", None)
    return str(code) if code is not None else None


__all__ = [
    "FCM_MAX_MULTICAST_TOKENS",
    "FirebaseTransport",
    "classify_send_error",
    "create_firebase_app",
]
