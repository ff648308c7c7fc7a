"""Speech-performance feedback from a transcript.

Builds a fixed three-message chat prompt around the transcript and asks the
LLM for compliments and improvement tips in one bounded call.
"""

import logging
from typing import Final

from speech_tracker.core.exceptions import FeedbackError, InvalidInputError, UpstreamError
from speech_tracker.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

FEEDBACK_SYSTEM_PROMPT: Final[str] = (
    "You are an assistant that provides constructive feedback on speech performance."
)
FEEDBACK_INSTRUCTION: Final[str] = (
    "Provide compliments and improvement tips based on the speech performance."
)


def build_feedback_messages(transcript: str) -> list[dict[str, str]]:
    """Return the chat messages for a transcript; the text is embedded verbatim."""
    return [
        {"role": "system", "content": FEEDBACK_SYSTEM_PROMPT},
        {"role": "user", "content": f'Here is a transcription of a speech: "{transcript}"'},
        {"role": "user", "content": FEEDBACK_INSTRUCTION},
    ]


class FeedbackGenerator:
    """Generates speaking feedback with a chat-capable LLM.

    Args:
        llm: Provider used for generation.
        model: Chat model name; None uses the provider default.
        max_tokens: Output cap for the feedback text.
        temperature: Sampling temperature.
    """

    def __init__(
        self,
        llm: BaseLLM,
        model: str | None = None,
        max_tokens: int = 150,
        temperature: float = 0.7,
    ) -> None:
        self._llm = llm
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def generate_feedback(self, transcript: str) -> str:
        """Return feedback text for ``transcript``.

        Raises:
            InvalidInputError: ``transcript`` is not a non-blank string.
            FeedbackError: The provider call failed.
        """
        if not isinstance(transcript, str) or not transcript.strip():
            logger.warning("Invalid transcription data: %r", transcript)
            raise InvalidInputError("Invalid transcription data")

        try:
            feedback = await self._llm.chat(
                build_feedback_messages(transcript),
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except UpstreamError as exc:
            logger.error("Feedback generation failed (status=%s): %s", exc.upstream_status, exc.detail)
            raise FeedbackError(
                exc.provider_message,
                upstream_status=exc.upstream_status,
                status_code=exc.status_code,
            ) from exc

        logger.info("Generated feedback (%d chars)", len(feedback))
        return feedback
