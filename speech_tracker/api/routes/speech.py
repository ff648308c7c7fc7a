"""
Speech relay endpoints.

Three request/response relays to the external AI provider: transcription
of an uploaded audio file, feedback on a transcript, and practice
paragraph generation. Validation and provider calls live in the service
layer; these handlers only adapt HTTP to it.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from speech_tracker.api.dependencies import get_feedback_generator, get_paragraph_generator, get_stt
from speech_tracker.core.config import get_settings
from speech_tracker.core.exceptions import InvalidInputError
from speech_tracker.core.models import (
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
    ParagraphRequest,
    ParagraphResponse,
    TranscriptionResponse,
)
from speech_tracker.services.audio.source import build_payload
from speech_tracker.services.feedback import FeedbackGenerator
from speech_tracker.services.paragraph import ParagraphGenerator
from speech_tracker.services.transcription import BaseSTT

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["speech"],
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)


@router.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe_speech(
    file: list[UploadFile] | None = File(None),
    prompt: str | None = Form(None),
    stt: BaseSTT = Depends(get_stt),
):
    """Transcribe the first uploaded audio file."""
    if not file:
        raise InvalidInputError("No file uploaded")
    if len(file) > 1:
        logger.warning("Received %d files; only '%s' will be transcribed", len(file), file[0].filename)

    upload = file[0]
    limit = get_settings().max_upload_bytes
    if upload.size is not None and upload.size > limit:
        raise InvalidInputError(f"Audio file is too large; the limit is {limit / 1_048_576:.0f} MB")

    data = await upload.read()
    await upload.close()
    payload = build_payload(data, upload.filename, upload.content_type, max_bytes=limit)

    transcription = await stt.transcribe(payload, prompt=prompt)
    return TranscriptionResponse(transcription=transcription)


@router.post("/feedback", response_model=FeedbackResponse)
async def generate_feedback(
    body: FeedbackRequest,
    generator: FeedbackGenerator = Depends(get_feedback_generator),
):
    """Generate speaking feedback for a transcript."""
    feedback = await generator.generate_feedback(body.transcription)
    return FeedbackResponse(feedback=feedback)


@router.post("/paragraph", response_model=ParagraphResponse)
async def generate_paragraph(
    body: ParagraphRequest,
    generator: ParagraphGenerator = Depends(get_paragraph_generator),
):
    """Generate a Casual or Formal practice paragraph."""
    paragraph = await generator.generate_paragraph(body.mode)
    return ParagraphResponse(paragraph=paragraph)
