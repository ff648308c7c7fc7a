"""Microphone recording state machine.

``AudioRecorder`` buffers PCM chunks pushed by a microphone callback
between ``start()`` and ``stop()`` and hands back a single WAV payload.

States: idle -> recording -> stopped
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from speech_tracker.core.exceptions import InvalidInputError, PermissionDeniedError
from speech_tracker.core.models import AudioPayload, RecorderState
from speech_tracker.services.audio.processor import AudioProcessor
from speech_tracker.services.audio.source import RECORDING_FILENAME

logger = logging.getLogger(__name__)


class MicrophoneStream(Protocol):
    """Handle to an open capture stream."""

    def close(self) -> None: ...


class Microphone(Protocol):
    """Capture device that pushes raw 16-bit PCM chunks to a callback.

    ``open`` must raise ``PermissionError`` (or ``OSError``) when access
    to the device is refused.
    """

    def open(
        self,
        on_chunk: Callable[[bytes], None],
        sample_rate: int,
        channels: int,
    ) -> MicrophoneStream: ...


class AudioRecorder:
    """Records one utterance at a time from a ``Microphone``.

    Args:
        microphone: Device used for capture.
        sample_rate: Capture sample rate in Hz.
        channels: Number of capture channels.
        on_stop: Called with the finished payload when ``stop()`` succeeds,
            typically to submit it to the pipeline.
    """

    def __init__(
        self,
        microphone: Microphone,
        sample_rate: int = 16000,
        channels: int = 1,
        on_stop: Callable[[AudioPayload], None] | None = None,
    ) -> None:
        self._microphone = microphone
        self._processor = AudioProcessor(sample_rate=sample_rate, channels=channels)
        self._on_stop = on_stop
        self._stream: MicrophoneStream | None = None
        self._chunks: list[bytes] = []
        self._lock = threading.Lock()  # chunks arrive on the audio driver thread
        self._state = RecorderState.idle

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state == RecorderState.recording

    def _on_chunk(self, chunk: bytes) -> None:
        if chunk:
            with self._lock:
                self._chunks.append(bytes(chunk))

    def start(self) -> bool:
        """Request microphone access and begin buffering.

        Returns:
            True if a new recording started, False if one was already active.

        Raises:
            PermissionDeniedError: Microphone access was refused.
        """
        if self._state == RecorderState.recording:
            logger.warning("Recording already in progress; ignoring start()")
            return False

        with self._lock:
            self._chunks.clear()

        try:
            self._stream = self._microphone.open(
                self._on_chunk,
                sample_rate=self._processor.sample_rate,
                channels=self._processor.channels,
            )
        except (PermissionError, OSError) as exc:
            logger.error("Error accessing microphone: %s", exc)
            self._stream = None
            self._state = RecorderState.idle
            raise PermissionDeniedError() from exc

        self._state = RecorderState.recording
        logger.info("Recording started")
        return True

    def stop(self) -> AudioPayload:
        """Close the stream and finalize buffered chunks into one payload.

        Raises:
            InvalidInputError: No recording is active, or nothing was captured.
        """
        if self._state != RecorderState.recording:
            raise InvalidInputError("No recording in progress")

        if self._stream is not None:
            try:
                self._stream.close()
            finally:
                self._stream = None

        with self._lock:
            pcm = b"".join(self._chunks)
            chunk_count = len(self._chunks)
            self._chunks.clear()

        if len(pcm) < self._processor.frame_size:
            self._state = RecorderState.idle
            raise InvalidInputError("No audio was recorded")

        self._state = RecorderState.stopped
        logger.info(
            "Recording stopped: %d chunks, %.1fs",
            chunk_count,
            self._processor.duration_seconds(pcm),
        )

        usable = len(pcm) - (len(pcm) % self._processor.frame_size)
        if self._processor.is_silent(self._processor.pcm_to_ndarray(pcm[:usable])):
            logger.warning("Recording appears to be silent")

        payload = AudioPayload(
            data=self._processor.to_wav_bytes(pcm),
            media_type="audio/wav",
            filename=RECORDING_FILENAME,
        )
        if self._on_stop is not None:
            self._on_stop(payload)
        return payload
