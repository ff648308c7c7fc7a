"""
Shared plumbing for calling the OpenAI REST API with ``httpx``.

Both the transcription and the generation providers speak to the same
host with the same bearer credential; this module owns client
construction and error-body parsing so they stay consistent.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


def create_openai_client(
    api_key: str,
    base_url: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build an ``httpx.AsyncClient`` bound to the OpenAI API.

    Args:
        api_key: Bearer credential.
        base_url: API root, e.g. ``https://api.openai.com/v1``.
        timeout: Seconds allowed per request (connect, read, write and pool).
        transport: Optional transport override (tests use ``httpx.MockTransport``).
    """
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        headers={"Authorization": f"Bearer {api_key}"},
        timeout=httpx.Timeout(timeout),
        transport=transport,
    )


def upstream_error_message(response: httpx.Response, default: str) -> str:
    """Extract the provider's error message from a failed response.

    OpenAI answers ``{"error": {"message": ...}}``; a bare string under
    ``error`` is accepted too. Anything else yields ``default``.
    """
    try:
        body = response.json()
    except ValueError:
        return default

    if not isinstance(body, dict):
        return default
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    elif isinstance(error, str) and error.strip():
        return error.strip()
    return default
