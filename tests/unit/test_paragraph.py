"""Unit tests for practice paragraph generation."""

import pytest

from speech_tracker.core.exceptions import (
    InvalidInputError,
    ParagraphGenerationError,
    UpstreamError,
)
from speech_tracker.core.models import ParagraphStyle
from speech_tracker.services.paragraph import PARAGRAPH_PROMPTS, ParagraphGenerator, parse_style


class TestParseStyle:
    def test_accepts_exact_values(self):
        assert parse_style("Casual") is ParagraphStyle.casual
        assert parse_style("Formal") is ParagraphStyle.formal
        assert parse_style(ParagraphStyle.formal) is ParagraphStyle.formal

    @pytest.mark.parametrize("value", ["Loud", "casual", "", None])
    def test_rejects_other_values(self, value):
        with pytest.raises(InvalidInputError, match="Invalid mode"):
            parse_style(value)


class TestGenerateParagraph:
    async def test_casual(self, mock_llm):
        generator = ParagraphGenerator(mock_llm, model="gpt-3.5-turbo-instruct", max_tokens=100)

        result = await generator.generate_paragraph("Casual")

        assert result == "The weekend market was buzzing with music and laughter."
        args, kwargs = mock_llm.complete.call_args
        assert args[0] == PARAGRAPH_PROMPTS[ParagraphStyle.casual]
        assert "casual" in args[0]
        assert kwargs["max_tokens"] == 100

    async def test_formal_prompt(self, mock_llm):
        await ParagraphGenerator(mock_llm).generate_paragraph(ParagraphStyle.formal)
        assert mock_llm.complete.call_args[0][0] == PARAGRAPH_PROMPTS[ParagraphStyle.formal]

    async def test_unknown_mode_makes_no_call(self, mock_llm):
        with pytest.raises(InvalidInputError, match="Invalid mode: Loud"):
            await ParagraphGenerator(mock_llm).generate_paragraph("Loud")

        mock_llm.complete.assert_not_awaited()

    async def test_upstream_failure(self, mock_llm):
        mock_llm.complete.side_effect = UpstreamError(None, upstream_status=503)

        with pytest.raises(ParagraphGenerationError) as exc_info:
            await ParagraphGenerator(mock_llm).generate_paragraph("Formal")

        assert exc_info.value.detail == "Failed to generate paragraph"
        assert exc_info.value.status_code == 503
