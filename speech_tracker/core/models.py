"""
Request / response models and transient value types.

Pydantic v2 models describe the relay API wire format; ``AudioPayload``
is the in-memory audio handed from an audio source to transcription.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Audio
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AudioPayload:
    """Raw audio bytes plus declared media type, scoped to one pipeline run."""

    data: bytes = field(repr=False)
    media_type: str
    filename: str = "speech.wav"

    @property
    def size(self) -> int:
        return len(self.data)


class RecorderState(StrEnum):
    """Microphone recorder lifecycle."""

    idle = "idle"
    recording = "recording"
    stopped = "stopped"


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscriptionResponse(BaseModel):
    """POST /api/v1/transcribe response."""

    transcription: str


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


class FeedbackRequest(BaseModel):
    """POST /api/v1/feedback request body."""

    transcription: str


class FeedbackResponse(BaseModel):
    """POST /api/v1/feedback response."""

    feedback: str


# ---------------------------------------------------------------------------
# Paragraph
# ---------------------------------------------------------------------------


class ParagraphStyle(StrEnum):
    """Register of the practice paragraph the user reads aloud."""

    casual = "Casual"
    formal = "Formal"


class ParagraphRequest(BaseModel):
    """POST /api/v1/paragraph request body.

    ``mode`` is a plain string so an unknown value is reported as
    ``INVALID_INPUT`` by the paragraph service rather than a schema error.
    """

    mode: str


class ParagraphResponse(BaseModel):
    """POST /api/v1/paragraph response."""

    paragraph: str


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class PipelineStatus(StrEnum):
    """Possible states of one capture -> transcribe -> feedback run."""

    idle = "idle"
    capturing = "capturing"
    processing = "processing"
    succeeded = "succeeded"
    failed = "failed"


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error envelope returned by the API."""

    error: str
    code: str
    timestamp: str
