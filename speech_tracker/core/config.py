"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from speech_tracker.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Speech Tracker settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        openai_api_key: Credential for the transcription and generation APIs.
        request_timeout: Seconds before an outbound provider call is abandoned.
        max_upload_bytes: Largest accepted audio upload.
        api_base_url: Backend URL used by the Streamlit UI and the recorder script.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Provider credentials ---
    openai_api_key: str = ""  # Required: the API refuses to start without it
    openai_base_url: str = "https://api.openai.com/v1"

    # --- Speech-to-text ---
    stt_provider: str = "openai"
    transcription_model: str = "whisper-1"
    transcription_response_format: str = "json"

    # --- Text generation ---
    llm_provider: str = "openai"
    feedback_model: str = "gpt-3.5-turbo"
    feedback_max_tokens: int = Field(default=150, ge=1, le=4096)
    feedback_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    paragraph_model: str = "gpt-3.5-turbo-instruct"
    paragraph_max_tokens: int = Field(default=100, ge=1, le=4096)
    paragraph_temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    # --- Limits ---
    request_timeout: float = Field(default=30.0, gt=0)  # Per outbound provider call
    max_upload_bytes: int = 25 * 1024 * 1024  # OpenAI's audio upload ceiling

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]

    # --- UI / recorder client ---
    api_base_url: str = "http://localhost:8000"
    api_timeout: float = Field(default=120.0, gt=0)  # Transcription of long clips is slow
    recording_sample_rate: int = 16000
    recording_channels: int = 1

    def require_api_key(self) -> str:
        """Return the provider credential or fail fast when it is missing.

        Raises:
            ConfigurationError: If ``OPENAI_API_KEY`` is unset or blank.
        """
        key = self.openai_api_key.strip()
        if not key:
            raise ConfigurationError("Missing OPENAI_API_KEY in environment variables")
        return key


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
