"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, and the health endpoint. The module-level ``app`` instance
allows ``uvicorn speech_tracker.api.app:app --reload``.

Startup fails with ``ConfigurationError`` when the provider credential is
missing, so a misconfigured server never starts accepting requests.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from speech_tracker.api.dependencies import close_services
from speech_tracker.api.middleware.error_handler import register_error_handlers
from speech_tracker.api.routes import speech
from speech_tracker.core.config import get_settings
from speech_tracker.core.models import HealthResponse

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """Stream application logs to stdout at the configured level."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    for name in ("httpx", "httpcore", "multipart"):
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Validate configuration on startup and close provider clients on shutdown."""
    settings = get_settings()
    _configure_logging(settings.log_level)
    settings.require_api_key()
    logger.info(
        "Speech Tracker API starting (models: %s, %s, %s)",
        settings.transcription_model,
        settings.feedback_model,
        settings.paragraph_model,
    )
    yield
    await close_services()


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application."""

    settings = get_settings()
    app = FastAPI(
        title="Speech Tracker",
        description="Speech practice relay: transcription, speaking feedback, "
        "and practice paragraphs.",
        version="0.1.0",
        lifespan=lifespan,
    )

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check (root-level, not under /api/v1) --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(UTC))

    # -- REST routes --
    app.include_router(speech.router, prefix="/api/v1")

    return app


app = create_app()
