"""
Structured document chunking task.

Serializes the full content, each section and the complete structure into
separate JSON chunks for embedding.

Dependencies: json
System role: Third stage of document ingestion pipeline
"""

import json
from typing import Any

from ..models import Chunk, ChunkType


def to_json(data: Any) -> str:
    """Compact JSON encoding used for every chunk."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


class ChunkingTask:
    """Split a structured document into full-content, section and document chunks."""

    def chunk(self, document: dict[str, Any]) -> list[Chunk]:
        """
        Produce chunks in fixed order.

        Order: full_content, one chunk per section in document order, then
        the complete structured document. Always len(sections) + 2 chunks.

        Args:
            document: Structured document dict ({content, metadata, sections})

        Returns:
            list[Chunk]: Chunks ready for embedding
        """
        metadata = document.get("metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        sections = document.get("sections")
        if not isinstance(sections, list):
            sections = []

        texts: list[tuple[ChunkType, str]] = [
            (
                ChunkType.FULL_CONTENT,
                to_json({
                    "type": ChunkType.FULL_CONTENT.value,
                    "content": document.get("content"),
                    "metadata": metadata,
                }),
            )
        ]

        for section in sections:
            section = section if isinstance(section, dict) else {"content": section}
            title = section.get("title")
            texts.append((
                ChunkType.SECTION,
                to_json({
                    "type": ChunkType.SECTION.value,
                    "title": title,
                    "content": section.get("content"),
                    "metadata": {**metadata, "sectionTitle": title},
                }),
            ))

        texts.append((ChunkType.DOCUMENT, to_json(document)))

        return [
            Chunk(type=chunk_type, index=index, text=text)
            for index, (chunk_type, text) in enumerate(texts)
        ]
