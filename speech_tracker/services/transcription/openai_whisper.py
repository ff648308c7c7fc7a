"""OpenAI Whisper STT implementation.

Posts the audio as a multipart form to ``/audio/transcriptions`` with a
fixed model selector and JSON response format. One attempt per call:
failures are translated into ``TranscriptionError`` and never retried.
"""

import logging

import httpx

from speech_tracker.core.config import Settings, get_settings
from speech_tracker.core.exceptions import ParseError, TranscriptionError
from speech_tracker.core.models import AudioPayload
from speech_tracker.services.openai_http import create_openai_client, upstream_error_message
from speech_tracker.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class OpenAIWhisperSTT(BaseSTT):
    """Speech-to-text provider backed by the OpenAI transcription endpoint.

    Args:
        api_key: Bearer credential (defaults to ``Settings.openai_api_key``).
        model: Model selector sent with every request (e.g. "whisper-1").
        settings: Optional Settings instance (defaults to get_settings()).
        transport: Optional httpx transport override.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._api_key = api_key or self._settings.require_api_key()
        self._model = model or self._settings.transcription_model
        self._response_format = self._settings.transcription_response_format
        self._client = create_openai_client(
            api_key=self._api_key,
            base_url=self._settings.openai_base_url,
            timeout=self._settings.request_timeout,
            transport=transport,
        )

    async def transcribe(self, payload: AudioPayload, **kwargs) -> str:
        """Transcribe an audio payload.

        Args:
            payload: Audio to transcribe.
            **kwargs: Optional ``prompt`` with vocabulary hints.

        Returns:
            The trimmed transcript text.
        """
        files = {"file": (payload.filename, payload.data, payload.media_type)}
        form = {"model": self._model, "response_format": self._response_format}
        prompt = kwargs.get("prompt")
        if prompt:
            form["prompt"] = prompt

        try:
            response = await self._client.post("/audio/transcriptions", files=files, data=form)
        except httpx.TimeoutException as exc:
            logger.error("Transcription request timed out: %s", exc)
            raise TranscriptionError("Transcription request timed out", status_code=504) from exc
        except httpx.HTTPError as exc:
            logger.error("Transcription request failed: %s", exc)
            raise TranscriptionError(f"Failed to reach transcription service: {exc}") from exc

        if response.is_error:
            message = upstream_error_message(response, TranscriptionError.default_detail)
            logger.error(
                "OpenAI Whisper API error (status=%s): %s", response.status_code, message
            )
            raise TranscriptionError(message, upstream_status=response.status_code)

        try:
            text = response.json()["text"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ParseError("Transcription response did not contain text") from exc
        if not isinstance(text, str):
            raise ParseError("Transcription response did not contain text")

        transcript = text.strip()
        logger.info(
            "Transcribed %s (%d bytes) -> %d chars", payload.filename, payload.size, len(transcript)
        )
        return transcript

    async def aclose(self) -> None:
        await self._client.aclose()
