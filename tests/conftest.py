"""Shared pytest fixtures for the Speech Tracker test suite.

Provides mock LLM/STT providers, settings with a test credential, and
generated PCM audio used across unit and integration tests.
"""

import math
import struct
from unittest.mock import AsyncMock

import pytest

from speech_tracker.core.config import Settings
from speech_tracker.core.models import AudioPayload

# ---------------------------------------------------------------------------
# Settings Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings():
    """Settings with a test credential, ignoring any local .env file."""
    return Settings(_env_file=None, openai_api_key="sk-test-key")


# ---------------------------------------------------------------------------
# LLM Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm():
    """Create a mock LLM provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseLLM interface with default
        chat and completion responses.
    """
    from speech_tracker.services.llm.base import BaseLLM

    llm = AsyncMock(spec=BaseLLM)
    llm.chat.return_value = "Great pacing. Try to pause between ideas."
    llm.complete.return_value = "The weekend market was buzzing with music and laughter."
    return llm


# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface with a
        default transcribe response.
    """
    from speech_tracker.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "Hello world"
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_pcm_bytes():
    """Generate 1 second of 440Hz sine-wave PCM audio (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    sample_rate = 16000
    duration = 1.0
    frequency = 440.0
    amplitude = 16000  # ~50% of max int16

    samples = []
    for i in range(int(sample_rate * duration)):
        value = int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate))
        samples.append(struct.pack("<h", value))
    return b"".join(samples)


@pytest.fixture
def silent_pcm_bytes():
    """Generate 1 second of silence as PCM audio (16kHz, 16-bit, mono)."""
    return b"\x00\x00" * 16000


@pytest.fixture
def wav_payload():
    """A small WAV payload as produced by an upload or recording."""
    return AudioPayload(data=b"RIFF0000WAVEfmt data", media_type="audio/wav", filename="speech.wav")
