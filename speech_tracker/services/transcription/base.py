"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface, enabling
provider-agnostic transcription in the API layer.
"""

from abc import ABC, abstractmethod

from speech_tracker.core.models import AudioPayload


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, payload: AudioPayload, **kwargs) -> str:
        """Transcribe one audio payload to text.

        Args:
            payload: Audio bytes with media type and filename.
            **kwargs: Provider-specific options (e.g. ``prompt``).

        Returns:
            The trimmed transcript; an empty string is a valid result.

        Raises:
            TranscriptionError: The provider rejected or failed the request.
            ParseError: The provider answered with an unexpected body.
        """

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
