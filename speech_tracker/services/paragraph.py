"""Practice paragraph generation for the read-aloud mode."""

import logging
from typing import Final

from speech_tracker.core.exceptions import (
    InvalidInputError,
    ParagraphGenerationError,
    UpstreamError,
)
from speech_tracker.core.models import ParagraphStyle
from speech_tracker.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

PARAGRAPH_PROMPTS: Final[dict[ParagraphStyle, str]] = {
    ParagraphStyle.casual: "Generate a casual paragraph for someone to read aloud.",
    ParagraphStyle.formal: "Generate a formal paragraph for someone to read aloud.",
}


def parse_style(value: object) -> ParagraphStyle:
    """Coerce ``value`` to a ``ParagraphStyle``.

    Raises:
        InvalidInputError: ``value`` is not exactly "Casual" or "Formal".
    """
    if isinstance(value, ParagraphStyle):
        return value
    try:
        return ParagraphStyle(value)
    except ValueError:
        logger.warning("Invalid mode received: %r", value)
        raise InvalidInputError(f"Invalid mode: {value}") from None


class ParagraphGenerator:
    """Requests a short paragraph in the selected style.

    Args:
        llm: Provider used for completion.
        model: Completion model name; None uses the provider default.
        max_tokens: Output cap for the paragraph.
        temperature: Sampling temperature.
    """

    def __init__(
        self,
        llm: BaseLLM,
        model: str | None = None,
        max_tokens: int = 100,
        temperature: float = 0.7,
    ) -> None:
        self._llm = llm
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def generate_paragraph(self, style: ParagraphStyle | str) -> str:
        """Return a trimmed paragraph for ``style``.

        Raises:
            InvalidInputError: Unknown style; no provider call is made.
            ParagraphGenerationError: The provider call failed.
        """
        selected = parse_style(style)
        try:
            paragraph = await self._llm.complete(
                PARAGRAPH_PROMPTS[selected],
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except UpstreamError as exc:
            logger.error(
                "Paragraph generation failed (status=%s): %s", exc.upstream_status, exc.detail
            )
            raise ParagraphGenerationError(
                exc.provider_message,
                upstream_status=exc.upstream_status,
                status_code=exc.status_code,
            ) from exc

        logger.info("Generated %s paragraph (%d chars)", selected.value, len(paragraph))
        return paragraph
