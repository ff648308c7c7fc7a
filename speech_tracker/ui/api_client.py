"""
Synchronous HTTP client for the Speech Tracker backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
Implements the ``SpeechBackend`` calls composed by ``PipelineController``.
"""

import logging

import httpx
import streamlit as st

from speech_tracker.core.exceptions import SpeechTrackerError
from speech_tracker.core.models import AudioPayload, ParagraphStyle
from speech_tracker.services.paragraph import parse_style

logger = logging.getLogger(__name__)


class APIError(SpeechTrackerError):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "response".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown", status_code: int = 500) -> None:
        self.message = message
        self.category = category
        super().__init__(detail=message, code=f"API_{category.upper()}", status_code=status_code)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed values or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the Speech Tracker FastAPI backend.
            timeout: Seconds allowed per backend call.
            transport: Optional httpx transport override.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout, transport=transport)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post").
            path: API endpoint path (e.g. "/api/v1/feedback").
            **kwargs: Passed through to httpx (json, files, data, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn speech_tracker.api.app:app --reload --port 8000`",
                category="connection",
                status_code=503,
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
                status_code=504,
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                body = exc.response.json()
                detail = body.get("error") or body.get("detail") or exc.response.text
            except Exception:
                detail = exc.response.text or str(exc)
            logger.error("Backend %s %s failed (%s): %s", method.upper(), path, exc.response.status_code, detail)
            raise APIError(str(detail), category="http", status_code=exc.response.status_code) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network", status_code=502) from None

    @staticmethod
    def _field(resp: httpx.Response, name: str) -> str:
        """Read one string field from a JSON response body."""
        try:
            value = resp.json()[name]
        except (ValueError, KeyError, TypeError):
            value = None
        if not isinstance(value, str):
            raise APIError(f"Backend response is missing '{name}'", category="response", status_code=502)
        return value

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- speech --

    def transcribe(self, payload: AudioPayload, prompt: str | None = None) -> str:
        """Upload audio as multipart form data and return the transcript."""
        files = {"file": (payload.filename, payload.data, payload.media_type)}
        data = {"prompt": prompt} if prompt else None
        resp = self._request("post", "/api/v1/transcribe", files=files, data=data)
        return self._field(resp, "transcription")

    def generate_feedback(self, transcript: str) -> str:
        resp = self._request("post", "/api/v1/feedback", json={"transcription": transcript})
        return self._field(resp, "feedback")

    def generate_paragraph(self, mode: ParagraphStyle | str) -> str:
        """Request a practice paragraph; unknown modes fail before any request."""
        style = parse_style(mode)
        resp = self._request("post", "/api/v1/paragraph", json={"mode": style.value})
        return self._field(resp, "paragraph")

    def close(self) -> None:
        self._client.close()


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:8000", timeout: float = 120.0) -> APIClient:
    """Return a cached APIClient, keyed by base_url and timeout.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(base_url=base_url, timeout=timeout)
