"""Integration test fixtures for the Speech Tracker API.

Provides an async HTTP client over ``ASGITransport`` with provider
dependencies replaced by mocks, so routes, validation, and error
envelopes run for real without network access.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from speech_tracker.api import dependencies
from speech_tracker.api.app import create_app
from speech_tracker.services.feedback import FeedbackGenerator
from speech_tracker.services.paragraph import ParagraphGenerator


@pytest.fixture
def app(mock_stt, mock_llm):
    """Create a fresh FastAPI application with mocked providers."""
    application = create_app()
    application.dependency_overrides[dependencies.get_stt] = lambda: mock_stt
    application.dependency_overrides[dependencies.get_feedback_generator] = lambda: FeedbackGenerator(
        mock_llm, model="gpt-3.5-turbo"
    )
    application.dependency_overrides[dependencies.get_paragraph_generator] = lambda: ParagraphGenerator(
        mock_llm, model="gpt-3.5-turbo-instruct"
    )
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(app):
    """AsyncClient bound to the app; unhandled errors become 500 responses."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
