"""
Task modules for document processing pipeline.

Exports: SectionSplittingTask, StructuringTask, ChunkingTask, EmbeddingTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .section_splitting_task import SectionSplittingTask
from .structuring_task import StructuringTask

__all__ = [
    "SectionSplittingTask",
    "StructuringTask",
    "ChunkingTask",
    "EmbeddingTask",
]
