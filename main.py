import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notifier.config import get_settings
from notifier.infrastructure.database import engine, initialize_database
from notifier.interfaces.api.routes import register_routes


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""

    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database tables at startup and release resources on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    configure_logging()
    app = FastAPI(title="hall-notifier", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
