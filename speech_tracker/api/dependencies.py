"""
FastAPI dependency providers for the relay services.

Providers are built once per process and cached; ``close_services()``
releases their HTTP clients on shutdown. Tests replace them through
``app.dependency_overrides``.
"""

import logging
from functools import lru_cache

from speech_tracker.core.config import get_settings
from speech_tracker.core.exceptions import ConfigurationError, InternalError
from speech_tracker.services.feedback import FeedbackGenerator
from speech_tracker.services.llm import BaseLLM, create_llm
from speech_tracker.services.paragraph import ParagraphGenerator
from speech_tracker.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)


def _credential() -> str:
    try:
        return get_settings().require_api_key()
    except ConfigurationError as exc:
        # Startup validation was bypassed; report per request instead of crashing
        logger.error("Provider credential missing at request time")
        raise InternalError(exc.detail) from exc


@lru_cache
def get_stt() -> BaseSTT:
    settings = get_settings()
    return create_stt(settings.stt_provider, api_key=_credential())


@lru_cache
def get_llm() -> BaseLLM:
    settings = get_settings()
    return create_llm(settings.llm_provider, api_key=_credential())


def get_feedback_generator() -> FeedbackGenerator:
    settings = get_settings()
    return FeedbackGenerator(
        get_llm(),
        model=settings.feedback_model,
        max_tokens=settings.feedback_max_tokens,
        temperature=settings.feedback_temperature,
    )


def get_paragraph_generator() -> ParagraphGenerator:
    settings = get_settings()
    return ParagraphGenerator(
        get_llm(),
        model=settings.paragraph_model,
        max_tokens=settings.paragraph_max_tokens,
        temperature=settings.paragraph_temperature,
    )


async def close_services() -> None:
    """Close cached providers that were created during the app's lifetime."""
    for provider in (get_stt, get_llm):
        if provider.cache_info().currsize:
            await provider().aclose()
        provider.cache_clear()
