"""Tests for prompt context formatting."""

from ragchat.boundary.vdb.vector_schemas import ContextMatch
from ragchat.core.rag_query.context_formatter import format_context_for_prompt


class TestFormatContextForPrompt:
    """Test format_context_for_prompt."""

    def test_empty_input_returns_empty_string(self) -> None:
        assert format_context_for_prompt([]) == ""

    def test_single_match(self) -> None:
        match = ContextMatch(score=0.8732, text="Rates are 9%.", metadata={"source": "guide.pdf"})

        assert format_context_for_prompt([match]) == (
            "[Context 1] (Relevance: 87.3%) guide.pdf:\nRates are 9%.\n"
        )

    def test_zero_score_omits_relevance_and_source_defaults(self) -> None:
        match = ContextMatch(score=0.0, text="No score.", metadata={})

        assert format_context_for_prompt([match]) == "[Context 1] Document:\nNo score.\n"

    def test_blocks_are_numbered_and_separated(self) -> None:
        matches = [
            ContextMatch(score=0.85, text="first", metadata={"source": "fallback-knowledge-base"}),
            {"score": 0.75, "text": "second", "metadata": {"source": "fallback-general-knowledge"}},
        ]

        result = format_context_for_prompt(matches)

        assert result == (
            "[Context 1] (Relevance: 85.0%) fallback-knowledge-base:\nfirst\n"
            "\n"
            "[Context 2] (Relevance: 75.0%) fallback-general-knowledge:\nsecond\n"
        )
