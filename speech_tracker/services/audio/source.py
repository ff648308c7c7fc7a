"""Upload-side audio source.

Turns one user upload (drag-and-drop, file picker, browser recording or
multipart request) into an ``AudioPayload``. Everything here runs before
any network call, so a rejected file never reaches a provider.
"""

import logging
import mimetypes
from collections.abc import Sequence
from typing import Final, Protocol

from speech_tracker.core.config import get_settings
from speech_tracker.core.exceptions import InvalidInputError
from speech_tracker.core.models import AudioPayload

logger = logging.getLogger(__name__)

# Canonical allow-list: extension -> media type sent upstream
ALLOWED_EXTENSIONS: Final[dict[str, str]] = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".mp4": "audio/mp4",
    ".webm": "audio/webm",
}

# Declared media types accepted as-is, mapped to their canonical form
_MEDIA_TYPE_ALIASES: Final[dict[str, str]] = {
    "audio/wav": "audio/wav",
    "audio/wave": "audio/wav",
    "audio/x-wav": "audio/wav",
    "audio/vnd.wave": "audio/wav",
    "audio/mpeg": "audio/mpeg",
    "audio/mp3": "audio/mpeg",
    "audio/mp4": "audio/mp4",
    "audio/m4a": "audio/mp4",
    "audio/x-m4a": "audio/mp4",
    "audio/aac": "audio/aac",
    "audio/x-aac": "audio/aac",
    "audio/webm": "audio/webm",
    "video/mp4": "audio/mp4",
    "video/webm": "audio/webm",
}

# Types browsers send when they do not know better
_GENERIC_MEDIA_TYPES: Final[set[str]] = {"", "application/octet-stream", "binary/octet-stream"}

RECORDING_FILENAME: Final[str] = "speech.wav"


class UploadedAudio(Protocol):
    """Anything exposing a filename, a declared type and its bytes."""

    name: str
    type: str

    def getvalue(self) -> bytes: ...


def resolve_media_type(filename: str | None, content_type: str | None) -> str:
    """Return the canonical media type for an upload or raise ``InvalidInputError``.

    The declared content type wins when it is a known audio type; generic or
    missing types fall back to the filename extension.
    """
    declared = (content_type or "").split(";", 1)[0].strip().lower()
    if declared in _MEDIA_TYPE_ALIASES:
        return _MEDIA_TYPE_ALIASES[declared]

    if declared in _GENERIC_MEDIA_TYPES and filename:
        extension = "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if extension in ALLOWED_EXTENSIONS:
            return ALLOWED_EXTENSIONS[extension]
        guessed, _ = mimetypes.guess_type(filename)
        if guessed and guessed.lower() in _MEDIA_TYPE_ALIASES:
            return _MEDIA_TYPE_ALIASES[guessed.lower()]

    allowed = ", ".join(sorted(ext.lstrip(".") for ext in ALLOWED_EXTENSIONS))
    raise InvalidInputError(
        f"Unsupported audio file '{filename or 'unnamed'}'. Allowed types: {allowed}"
    )


def build_payload(
    data: bytes,
    filename: str | None,
    content_type: str | None,
    max_bytes: int | None = None,
) -> AudioPayload:
    """Validate one upload and wrap it as an ``AudioPayload``.

    Args:
        data: Raw file content.
        filename: Original filename (used for extension fallback and upstream).
        content_type: Declared media type, possibly generic or missing.
        max_bytes: Size ceiling; defaults to ``Settings.max_upload_bytes``.

    Raises:
        InvalidInputError: Wrong type, empty file, or over the size limit.
    """
    limit = max_bytes if max_bytes is not None else get_settings().max_upload_bytes
    media_type = resolve_media_type(filename, content_type)

    if not data:
        raise InvalidInputError("Uploaded audio file is empty")
    if len(data) > limit:
        raise InvalidInputError(
            f"Audio file is too large ({len(data) / 1_048_576:.1f} MB); "
            f"the limit is {limit / 1_048_576:.0f} MB"
        )

    return AudioPayload(data=data, media_type=media_type, filename=filename or RECORDING_FILENAME)


def from_uploads(files: Sequence[UploadedAudio] | None, max_bytes: int | None = None) -> AudioPayload:
    """Build a payload from a file-picker selection, keeping only the first file."""
    if not files:
        raise InvalidInputError("No file uploaded")
    if len(files) > 1:
        logger.warning("Received %d files; only '%s' will be processed", len(files), files[0].name)
    first = files[0]
    return build_payload(first.getvalue(), first.name, first.type, max_bytes=max_bytes)


def from_recording(data: bytes, media_type: str = "audio/wav") -> AudioPayload:
    """Build a payload from a finished browser or microphone recording."""
    return build_payload(data, RECORDING_FILENAME, media_type)
