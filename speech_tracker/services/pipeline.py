"""Session-scoped speech analysis pipeline.

``PipelineController`` drives one capture -> transcribe -> feedback run at a
time and records the outcome in a ``PipelineState`` that the display layer
renders. Each UI session owns its own controller.

Usage::

    controller = PipelineController(backend)
    controller.begin_capture()
    state = controller.submit(payload)
    if state.status is PipelineStatus.succeeded:
        show(state.transcript, state.feedback)

States: idle -> capturing -> processing -> succeeded | failed
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from speech_tracker.core.exceptions import InternalError, PipelineBusyError, SpeechTrackerError
from speech_tracker.core.models import AudioPayload, PipelineStatus
from speech_tracker.services.audio.source import UploadedAudio, from_uploads

logger = logging.getLogger(__name__)


class SpeechBackend(Protocol):
    """The two calls a pipeline run composes."""

    def transcribe(self, payload: AudioPayload) -> str: ...

    def generate_feedback(self, transcript: str) -> str: ...


@dataclass(frozen=True)
class PipelineState:
    """Snapshot of a pipeline run for display."""

    status: PipelineStatus = PipelineStatus.idle
    transcript: str | None = None
    feedback: str | None = None
    error: str | None = None
    error_code: str | None = None

    @property
    def is_busy(self) -> bool:
        return self.status == PipelineStatus.processing


class PipelineController:
    """Sequential, fail-fast pipeline with a reject-while-processing policy.

    A new capture while a run is processing raises ``PipelineBusyError``;
    nothing is queued or merged. Step failures never escape: they end the
    run in ``failed`` with the failing step's message.

    Args:
        backend: Object performing transcription and feedback calls.
    """

    def __init__(self, backend: SpeechBackend) -> None:
        self._backend = backend
        self._state = PipelineState()

    @property
    def state(self) -> PipelineState:
        return self._state

    def _guard_idle(self) -> None:
        if self._state.is_busy:
            logger.warning("Capture rejected: a pipeline run is already processing")
            raise PipelineBusyError()

    def _fail(self, exc: SpeechTrackerError, step: str, transcript: str | None = None) -> PipelineState:
        logger.error("Pipeline step '%s' failed [%s]: %s", step, exc.code, exc.detail)
        self._state = PipelineState(
            status=PipelineStatus.failed,
            transcript=transcript,
            error=exc.detail,
            error_code=exc.code,
        )
        return self._state

    def reset(self) -> PipelineState:
        """Return to ``idle`` unless a run is processing."""
        self._guard_idle()
        self._state = PipelineState()
        return self._state

    def begin_capture(self) -> PipelineState:
        """Discard the previous result and enter ``capturing``."""
        self._guard_idle()
        self._state = PipelineState(status=PipelineStatus.capturing)
        return self._state

    def fail_capture(self, exc: SpeechTrackerError) -> PipelineState:
        """End the run during capture (e.g. microphone denied) without processing."""
        self._guard_idle()
        return self._fail(exc, "capture")

    def submit(self, payload: AudioPayload) -> PipelineState:
        """Transcribe ``payload`` then, on success, generate feedback.

        Returns:
            The final ``succeeded`` or ``failed`` state.

        Raises:
            PipelineBusyError: Another run is processing.
        """
        self._guard_idle()
        self._state = PipelineState(status=PipelineStatus.processing)
        logger.info("Processing %s (%s, %d bytes)", payload.filename, payload.media_type, payload.size)

        try:
            transcript = self._backend.transcribe(payload)
        except SpeechTrackerError as exc:
            return self._fail(exc, "transcribe")
        except Exception:
            logger.exception("Unexpected error during transcription")
            return self._fail(InternalError("Failed to transcribe speech"), "transcribe")

        self._state = PipelineState(status=PipelineStatus.processing, transcript=transcript)

        try:
            feedback = self._backend.generate_feedback(transcript)
        except SpeechTrackerError as exc:
            return self._fail(exc, "feedback", transcript=transcript)
        except Exception:
            logger.exception("Unexpected error during feedback generation")
            return self._fail(
                InternalError("Failed to generate feedback"), "feedback", transcript=transcript
            )

        self._state = PipelineState(
            status=PipelineStatus.succeeded,
            transcript=transcript,
            feedback=feedback,
        )
        return self._state

    def process_upload(self, files: Sequence[UploadedAudio] | None) -> PipelineState:
        """Validate a file selection and run the pipeline on the first file.

        Invalid selections end in ``failed`` before any network call.
        """
        self.begin_capture()
        try:
            payload = from_uploads(files)
        except SpeechTrackerError as exc:
            return self._fail(exc, "upload")
        return self.submit(payload)
