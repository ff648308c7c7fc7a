"""
Speech Tracker exception hierarchy.

All application-specific exceptions inherit from SpeechTrackerError,
enabling centralized error handling in the API middleware layer and
uniform failure reporting in the UI pipeline.
"""

from datetime import UTC, datetime


class SpeechTrackerError(Exception):
    """Base exception for all Speech Tracker errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "SPEECH_TRACKER_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class InvalidInputError(SpeechTrackerError):
    """Raised for bad file type/count/size or a malformed request body."""

    def __init__(self, detail: str = "Invalid input") -> None:
        super().__init__(detail=detail, code="INVALID_INPUT", status_code=400)


class PermissionDeniedError(SpeechTrackerError):
    """Raised when microphone access is refused."""

    def __init__(
        self, detail: str = "Unable to access microphone. Please check permissions."
    ) -> None:
        super().__init__(detail=detail, code="PERMISSION_DENIED", status_code=403)


class UpstreamError(SpeechTrackerError):
    """Raised when an external provider returns a non-success response.

    The provider's HTTP status is kept in ``upstream_status`` and relayed
    as the response status; transport failures without a status map to 502.
    ``provider_message`` is the message as given (None when the provider
    sent none), so wrappers can substitute their own default.
    """

    default_detail = "Upstream service request failed"
    error_code = "UPSTREAM_ERROR"

    def __init__(
        self,
        detail: str | None = None,
        upstream_status: int | None = None,
        status_code: int | None = None,
    ) -> None:
        self.upstream_status = upstream_status
        self.provider_message = detail
        super().__init__(
            detail=detail or self.default_detail,
            code=self.error_code,
            status_code=status_code or upstream_status or 502,
        )


class TranscriptionError(UpstreamError):
    """Raised when the transcription provider fails."""

    default_detail = "Failed to transcribe speech"
    error_code = "TRANSCRIPTION_ERROR"


class FeedbackError(UpstreamError):
    """Raised when feedback generation fails."""

    default_detail = "Failed to generate feedback"
    error_code = "FEEDBACK_ERROR"


class ParagraphGenerationError(UpstreamError):
    """Raised when practice paragraph generation fails."""

    default_detail = "Failed to generate paragraph"
    error_code = "PARAGRAPH_ERROR"


class ParseError(SpeechTrackerError):
    """Raised when a provider response cannot be interpreted."""

    def __init__(self, detail: str = "Malformed provider response") -> None:
        super().__init__(detail=detail, code="PARSE_ERROR", status_code=502)


class InternalError(SpeechTrackerError):
    """Raised for unexpected failures, e.g. a credential missing at request time."""

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(detail=detail, code="INTERNAL_ERROR", status_code=500)


class ConfigurationError(SpeechTrackerError):
    """Raised at startup when required configuration is absent."""

    def __init__(self, detail: str = "Invalid configuration") -> None:
        super().__init__(detail=detail, code="CONFIGURATION_ERROR", status_code=500)


class PipelineBusyError(SpeechTrackerError):
    """Raised when a new capture arrives while a pipeline run is processing."""

    def __init__(self) -> None:
        super().__init__(
            detail="A speech analysis is already in progress",
            code="PIPELINE_BUSY",
            status_code=409,
        )
