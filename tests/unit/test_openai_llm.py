"""Unit tests for the OpenAI LLM provider.

Requests are served by ``httpx.MockTransport`` so the exact wire body,
headers, and error translation can be asserted without network access.
"""

import json

import httpx
import pytest

from speech_tracker.core.exceptions import ParseError, UpstreamError
from speech_tracker.services.llm import create_llm
from speech_tracker.services.llm.openai_llm import OpenAILLM

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _transport(status=200, body=None, raw=None, captured=None, exc=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        if exc is not None:
            raise exc("simulated", request=request)
        if raw is not None:
            return httpx.Response(status, content=raw)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


def _chat_body(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFactory:
    def test_creates_openai(self, settings):
        llm = create_llm("openai", api_key="sk-x", settings=settings)
        assert isinstance(llm, OpenAILLM)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_llm("claude")


class TestChat:
    async def test_returns_trimmed_content(self, settings):
        captured = []
        llm = OpenAILLM(settings=settings, transport=_transport(body=_chat_body("  Nice job!\n"), captured=captured))

        result = await llm.chat([{"role": "user", "content": "hi"}], model="gpt-3.5-turbo", max_tokens=150)

        assert result == "Nice job!"
        request = captured[0]
        assert request.url.path.endswith("/chat/completions")
        assert request.headers["Authorization"] == "Bearer sk-test-key"
        body = json.loads(request.content)
        assert body["model"] == "gpt-3.5-turbo"
        assert body["max_tokens"] == 150
        assert body["temperature"] == 0.7
        assert body["messages"] == [{"role": "user", "content": "hi"}]

    async def test_upstream_error_keeps_status_and_message(self, settings):
        body = {"error": {"message": "Rate limit reached", "type": "requests"}}
        llm = OpenAILLM(settings=settings, transport=_transport(status=429, body=body))

        with pytest.raises(UpstreamError) as exc_info:
            await llm.chat([{"role": "user", "content": "hi"}])

        assert exc_info.value.upstream_status == 429
        assert exc_info.value.status_code == 429
        assert exc_info.value.detail == "Rate limit reached"

    async def test_error_without_message(self, settings):
        llm = OpenAILLM(settings=settings, transport=_transport(status=500, raw=b"oops"))

        with pytest.raises(UpstreamError) as exc_info:
            await llm.chat([{"role": "user", "content": "hi"}])

        assert exc_info.value.provider_message is None
        assert exc_info.value.status_code == 500

    async def test_timeout_maps_to_504(self, settings):
        llm = OpenAILLM(settings=settings, transport=_transport(exc=httpx.ReadTimeout))

        with pytest.raises(UpstreamError) as exc_info:
            await llm.chat([{"role": "user", "content": "hi"}])

        assert exc_info.value.status_code == 504

    async def test_connection_error_maps_to_502(self, settings):
        llm = OpenAILLM(settings=settings, transport=_transport(exc=httpx.ConnectError))

        with pytest.raises(UpstreamError) as exc_info:
            await llm.chat([{"role": "user", "content": "hi"}])

        assert exc_info.value.status_code == 502
        assert exc_info.value.upstream_status is None

    async def test_missing_choices_is_parse_error(self, settings):
        llm = OpenAILLM(settings=settings, transport=_transport(body={"choices": []}))

        with pytest.raises(ParseError):
            await llm.chat([{"role": "user", "content": "hi"}])

    async def test_non_json_body_is_parse_error(self, settings):
        llm = OpenAILLM(settings=settings, transport=_transport(raw=b"<html>"))

        with pytest.raises(ParseError):
            await llm.chat([{"role": "user", "content": "hi"}])


class TestComplete:
    async def test_posts_prompt_to_completions(self, settings):
        captured = []
        transport = _transport(body={"choices": [{"text": "\n\nA sunny day."}]}, captured=captured)
        llm = OpenAILLM(settings=settings, transport=transport)

        result = await llm.complete("Write something", model="gpt-3.5-turbo-instruct", max_tokens=100)

        assert result == "A sunny day."
        request = captured[0]
        assert request.url.path.endswith("/completions")
        assert not request.url.path.endswith("/chat/completions")
        body = json.loads(request.content)
        assert body == {
            "prompt": "Write something",
            "model": "gpt-3.5-turbo-instruct",
            "max_tokens": 100,
            "temperature": 0.7,
        }

    async def test_missing_text_is_parse_error(self, settings):
        llm = OpenAILLM(settings=settings, transport=_transport(body={"choices": [{}]}))

        with pytest.raises(ParseError):
            await llm.complete("Write something")
