"""
Structured document builder.

Wraps extracted text, its sections and extraction metadata into the
canonical document record. Text that already is a JSON object is kept as-is.

Dependencies: json, ragchat.core.document_processing.tasks.section_splitting_task
System role: Second stage of document ingestion pipeline
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from ..models import DocumentMetadata, Section, StructuredDocument
from .section_splitting_task import FALLBACK_TITLE, SectionSplittingTask

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/plain"
FALLBACK_SUFFIX = "-fallback"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StructuringTask:
    """Build a structured document from extracted text. Never raises."""

    def __init__(
        self,
        splitter: SectionSplittingTask | None = None,
        extraction_method: str = "vision-api",
    ) -> None:
        """
        Initialize structuring task.

        Args:
            splitter: Section splitter (default thresholds if None)
            extraction_method: extractionMethod tag for built documents
        """
        self._splitter = splitter or SectionSplittingTask()
        self._extraction_method = extraction_method

    def build(self, text: str) -> dict[str, Any]:
        """
        Convert extracted text into a structured document dict.

        Args:
            text: Extracted document text

        Returns:
            dict: {content, metadata, sections}, or the parsed JSON object
                when the text already is one
        """
        parsed = self._parse_json_object(text)
        if parsed is not None:
            logger.info(f"{__name__}:build - Text is already JSON, using as-is")
            return parsed

        try:
            return self.structure(text).to_dict()
        except Exception as e:
            logger.error(
                f"{__name__}:build - Falling back to single section: {type(e).__name__}: {e}",
                extra={"text_length": len(text)},
            )
            return self.fallback(text, e).to_dict()

    def structure(self, text: str) -> StructuredDocument:
        """
        Split text into sections and attach extraction metadata.

        Args:
            text: Plain (non-JSON) extracted text

        Returns:
            StructuredDocument: Immutable document record
        """
        sections = self._splitter.split(text)
        return StructuredDocument(
            content=text,
            metadata=DocumentMetadata(
                extraction_method=self._extraction_method,
                extraction_date=_utc_now_iso(),
                content_type=CONTENT_TYPE,
                section_count=len(sections),
            ),
            sections=tuple(sections),
        )

    def fallback(self, text: str, error: Exception) -> StructuredDocument:
        """Degraded single-section structure carrying the error message."""
        return StructuredDocument(
            content=text,
            metadata=DocumentMetadata(
                extraction_method=f"{self._extraction_method}{FALLBACK_SUFFIX}",
                extraction_date=_utc_now_iso(),
                error=str(error),
            ),
            sections=(Section(title=FALLBACK_TITLE, content=text),),
        )

    @staticmethod
    def _parse_json_object(text: str) -> dict[str, Any] | None:
        stripped = text.strip()
        if not (stripped.startswith("{") and stripped.endswith("}")):
            return None
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError:
            logger.info(
                f"{__name__}:build - Text looks like JSON but is not valid, proceeding with conversion"
            )
            return None
        return data if isinstance(data, dict) else None
