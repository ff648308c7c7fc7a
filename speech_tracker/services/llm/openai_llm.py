"""
OpenAI LLM provider implementation.

Talks to ``/chat/completions`` and ``/completions`` over ``httpx``. Each
call is a single attempt bounded by ``Settings.request_timeout``; transport
and HTTP failures are translated to ``UpstreamError`` so callers can tag
them with the operation that failed.
"""

import logging

import httpx

from speech_tracker.core.config import Settings, get_settings
from speech_tracker.core.exceptions import ParseError, UpstreamError
from speech_tracker.services.llm.base import BaseLLM
from speech_tracker.services.openai_http import create_openai_client, upstream_error_message

logger = logging.getLogger(__name__)


class OpenAILLM(BaseLLM):
    """OpenAI chat/completion provider.

    Args:
        api_key: Bearer credential (defaults to ``Settings.openai_api_key``).
        model: Default model when a call does not name one.
        max_tokens: Default output cap.
        temperature: Default sampling temperature.
        settings: Optional Settings instance (defaults to get_settings()).
        transport: Optional httpx transport override.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 150,
        temperature: float = 0.7,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._api_key = api_key or self._settings.require_api_key()
        self._model = model or self._settings.feedback_model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._client = create_openai_client(
            api_key=self._api_key,
            base_url=self._settings.openai_base_url,
            timeout=self._settings.request_timeout,
            transport=transport,
        )

    async def _post(self, path: str, body: dict) -> dict:
        """POST a JSON body and return the decoded JSON response."""
        try:
            response = await self._client.post(path, json=body)
        except httpx.TimeoutException as exc:
            logger.warning("OpenAI %s timed out: %s", path, exc)
            raise UpstreamError(f"OpenAI request timed out ({path})", status_code=504) from exc
        except httpx.HTTPError as exc:
            logger.warning("OpenAI %s connection error: %s", path, exc)
            raise UpstreamError(f"Failed to connect to OpenAI: {exc}") from exc

        if response.is_error:
            message = upstream_error_message(response, "")
            logger.error("OpenAI API error on %s (status=%s): %s", path, response.status_code, message)
            raise UpstreamError(message or None, upstream_status=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise ParseError(f"OpenAI returned a non-JSON body ({path})") from exc
        if not isinstance(data, dict):
            raise ParseError(f"OpenAI returned an unexpected body ({path})")
        return data

    def _options(self, kwargs: dict) -> dict:
        temperature = kwargs.get("temperature")
        return {
            "model": kwargs.get("model") or self._model,
            "max_tokens": kwargs.get("max_tokens") or self._max_tokens,
            "temperature": temperature if temperature is not None else self._temperature,
        }

    async def chat(self, messages: list[dict[str, str]], **kwargs) -> str:
        """Generate a chat completion and return the first choice's content."""
        data = await self._post("/chat/completions", {"messages": messages, **self._options(kwargs)})
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ParseError("Chat completion response had no message content") from exc
        if not isinstance(content, str):
            raise ParseError("Chat completion response had no message content")
        return content.strip()

    async def complete(self, prompt: str, **kwargs) -> str:
        """Generate a text completion and return the first choice's text."""
        data = await self._post("/completions", {"prompt": prompt, **self._options(kwargs)})
        try:
            text = data["choices"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ParseError("Completion response had no text") from exc
        if not isinstance(text, str):
            raise ParseError("Completion response had no text")
        return text.strip()

    async def aclose(self) -> None:
        await self._client.aclose()
