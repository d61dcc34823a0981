"""
Document processing pipeline for ingestion.

Turns extracted document text into sections, JSON chunks, embeddings and
vector store records.

Dependencies: langchain_core, langchain_openai, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .entrypoint import DocumentPipeline
from .models import Chunk, EmbeddingRecord, PipelineResult, Section, StructuredDocument

__all__ = [
    "DocumentPipeline",
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "Chunk",
    "EmbeddingRecord",
    "PipelineResult",
    "Section",
    "StructuredDocument",
]
