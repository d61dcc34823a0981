"""
Models for document processing pipeline.

Exports: Section, DocumentMetadata, StructuredDocument, Chunk, ChunkType,
EmbeddingRecord, PipelineResult
"""

from .chunk import Chunk, ChunkType, EmbeddingRecord
from .pipeline_result import PipelineResult
from .structured_document import DocumentMetadata, Section, StructuredDocument

__all__ = [
    "Section",
    "DocumentMetadata",
    "StructuredDocument",
    "Chunk",
    "ChunkType",
    "EmbeddingRecord",
    "PipelineResult",
]
