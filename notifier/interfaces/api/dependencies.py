"""FastAPI dependency utilities."""

from functools import lru_cache

from fastapi import Depends

from notifier.application.ports import PushTransport, TokenStore
from notifier.application.use_cases.notifications import DispatchEngine
from notifier.config import Settings, get_settings
from notifier.infrastructure.database import SessionLocal
from notifier.infrastructure.push import build_transport
from notifier.infrastructure.token_store import SqlAlchemyTokenStore


@lru_cache
def get_transport() -> PushTransport:
    """Return the process-wide push transport built from settings."""

    return build_transport(get_settings())


def get_token_store() -> TokenStore:
    """Return a token store bound to the application database."""

    return SqlAlchemyTokenStore(SessionLocal)


def get_dispatch_engine(
    transport: PushTransport = Depends(get_transport),
    settings: Settings = Depends(get_settings),
) -> DispatchEngine:
    """Return a dispatch engine configured from settings."""

    return DispatchEngine(
        transport,
        max_concurrency=settings.max_concurrent_batches,
        retry_attempts=settings.batch_retry_attempts,
        retry_backoff=settings.batch_retry_backoff_seconds,
    )
