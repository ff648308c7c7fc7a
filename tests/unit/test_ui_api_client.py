"""Unit tests for the Streamlit-side APIClient.

Validates request construction for each backend call, extraction of the
error envelope into ``APIError``, and client-side mode validation.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from speech_tracker.core.exceptions import InvalidInputError, SpeechTrackerError
from speech_tracker.core.models import ParagraphStyle
from speech_tracker.ui.api_client import APIClient, APIError


@pytest.fixture
def client():
    """Create an APIClient with a mocked httpx.Client."""
    with patch("speech_tracker.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        api = APIClient(base_url="http://test:8000")
        api._mock_http = mock_http  # expose for assertions
        yield api


def _ok(body):
    resp = MagicMock()
    resp.json.return_value = body
    return resp


def _status_error(status, body):
    request = httpx.Request("POST", "http://test:8000/api/v1/transcribe")
    response = httpx.Response(status, json=body, request=request)
    resp = MagicMock()
    resp.raise_for_status.side_effect = httpx.HTTPStatusError("error", request=request, response=response)
    return resp


class TestTranscribe:
    def test_posts_multipart_file(self, client, wav_payload):
        client._mock_http.post.return_value = _ok({"transcription": "Hello world"})

        result = client.transcribe(wav_payload)

        assert result == "Hello world"
        args, kwargs = client._mock_http.post.call_args
        assert args[0] == "/api/v1/transcribe"
        assert kwargs["files"] == {"file": ("speech.wav", wav_payload.data, "audio/wav")}
        assert kwargs["data"] is None

    def test_prompt_sent_as_form_field(self, client, wav_payload):
        client._mock_http.post.return_value = _ok({"transcription": "ok"})

        client.transcribe(wav_payload, prompt="FastAPI")

        assert client._mock_http.post.call_args[1]["data"] == {"prompt": "FastAPI"}

    def test_error_envelope_message(self, client, wav_payload):
        client._mock_http.post.return_value = _status_error(
            400, {"error": "Invalid file format.", "code": "TRANSCRIPTION_ERROR"}
        )

        with pytest.raises(APIError) as exc_info:
            client.transcribe(wav_payload)

        assert exc_info.value.message == "Invalid file format."
        assert exc_info.value.category == "http"
        assert exc_info.value.status_code == 400
        assert isinstance(exc_info.value, SpeechTrackerError)

    def test_missing_field(self, client, wav_payload):
        client._mock_http.post.return_value = _ok({"text": "wrong key"})

        with pytest.raises(APIError) as exc_info:
            client.transcribe(wav_payload)

        assert exc_info.value.category == "response"


class TestFeedback:
    def test_posts_transcription(self, client):
        client._mock_http.post.return_value = _ok({"feedback": "Nice!"})

        assert client.generate_feedback("Hello world") == "Nice!"
        client._mock_http.post.assert_called_once_with(
            "/api/v1/feedback", json={"transcription": "Hello world"}
        )


class TestParagraph:
    def test_posts_mode(self, client):
        client._mock_http.post.return_value = _ok({"paragraph": "Read me."})

        assert client.generate_paragraph(ParagraphStyle.casual) == "Read me."
        args, kwargs = client._mock_http.post.call_args
        assert args[0] == "/api/v1/paragraph"
        assert kwargs["json"] == {"mode": "Casual"}
        assert "timeout" not in kwargs

    def test_uses_configured_timeout(self):
        with patch("speech_tracker.ui.api_client.httpx.Client") as mock_cls:
            APIClient(base_url="http://test:8000", timeout=45.0)

        assert mock_cls.call_args[1]["timeout"] == 45.0

    def test_invalid_mode_makes_no_request(self, client):
        with pytest.raises(InvalidInputError, match="Invalid mode: Loud"):
            client.generate_paragraph("Loud")

        client._mock_http.post.assert_not_called()


class TestTransportErrors:
    def test_connection_error(self, client):
        client._mock_http.post.side_effect = httpx.ConnectError("refused")

        with pytest.raises(APIError) as exc_info:
            client.generate_feedback("Hello")

        assert exc_info.value.category == "connection"
        assert exc_info.value.code == "API_CONNECTION"

    def test_timeout(self, client):
        client._mock_http.post.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(APIError) as exc_info:
            client.generate_feedback("Hello")

        assert exc_info.value.category == "timeout"


class TestHealth:
    def test_check_connection_ok(self, client):
        client._mock_http.get.return_value = _ok({"status": "ok"})
        assert client.check_connection() == (True, "Connected")

    def test_check_connection_down(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        ok, message = client.check_connection()
        assert ok is False
        assert "not running" in message
