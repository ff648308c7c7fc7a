"""
Audio module - Upload validation, microphone recording and PCM utilities.
"""

from .processor import AudioProcessor
from .recorder import AudioRecorder, Microphone
from .source import build_payload, from_recording, from_uploads, resolve_media_type

__all__ = [
    "AudioProcessor",
    "AudioRecorder",
    "Microphone",
    "build_payload",
    "from_recording",
    "from_uploads",
    "resolve_media_type",
]
