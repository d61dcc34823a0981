"""
Section splitting task using line-based header heuristics.

Segments extracted document text into titled sections in reading order.

Dependencies: re
System role: First stage of document ingestion pipeline
"""

import logging
import re

from ..models import Section

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Introduction"
FALLBACK_TITLE = "Content"

HEADER_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "Section 1:" and anything else ending with a colon
    re.compile(r"^.*:$"),
    # All caps line, 5-100 chars
    re.compile(r"^[A-Z][A-Z\s.,;'\"\-]{4,99}$"),
    # Section/Article/Chapter/Part followed by a numeral
    re.compile(r"^(Section|Article|Chapter|Part)\s+[0-9IVXLCDM]+", re.IGNORECASE),
    # "1. Introduction"
    re.compile(r"^[0-9]+\.\s+[A-Z]"),
    # "IV. Introduction"
    re.compile(r"^[IVXLCDM]+\.\s+[A-Z]"),
    # "A. Introduction"
    re.compile(r"^[A-Z]\.\s+[A-Z]"),
)


def is_header(line: str) -> bool:
    """Return True when a stripped line looks like a section header."""
    return any(pattern.match(line) for pattern in HEADER_PATTERNS)


def header_title(line: str) -> str:
    """
    Derive a section title from a header line.

    The title is the text before the first colon; a line with nothing
    before its colon keeps its full text.

    Args:
        line: Stripped header line

    Returns:
        str: Section title
    """
    title = line.split(":", 1)[0].strip()
    return title or line


class SectionSplittingTask:
    """Split raw text into titled sections. Never raises."""

    def __init__(self, min_text_length: int = 200) -> None:
        """
        Initialize section splitting task.

        Args:
            min_text_length: Texts shorter than this stay one 'Content' section
        """
        self._min_text_length = min_text_length

    def split(self, text: str) -> list[Section]:
        """
        Split text into sections on detected header lines.

        Empty lines are skipped. Body lines keep their original whitespace.

        Args:
            text: Extracted document text

        Returns:
            list[Section]: Sections in document order (never empty)
        """
        try:
            if len(text) < self._min_text_length:
                return [Section(title=FALLBACK_TITLE, content=text)]

            sections: list[Section] = []
            title = DEFAULT_TITLE
            body: list[str] = []

            for line in text.split("\n"):
                stripped = line.strip()
                if not stripped:
                    continue

                if is_header(stripped):
                    content = "\n".join(body)
                    if content.strip():
                        sections.append(Section(title=title, content=content))
                    title = header_title(stripped)
                    body = []
                else:
                    body.append(line)

            content = "\n".join(body)
            if content.strip():
                sections.append(Section(title=title, content=content))

            if not sections:
                sections.append(Section(title=FALLBACK_TITLE, content=text))

            return sections

        except Exception as e:
            logger.error(
                f"{__name__}:split - {type(e).__name__}: {e}",
                extra={"text_length": len(text) if isinstance(text, str) else None},
            )
            return [Section(title=FALLBACK_TITLE, content=text if isinstance(text, str) else "")]
