"""
Vector database schemas.

Pydantic models for vector operations (upsert payloads, query results).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorRecord(BaseModel):
    """
    Vector payload sent to the index.

    Metadata always carries the chunk text under 'text' plus the
    document-level keys (fileName, userId, ...) used for scoped deletes.
    """

    id: str = Field(description="Deterministic chunk identifier")
    values: list[float] = Field(description="Embedding vector")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Vector metadata")


class ContextMatch(BaseModel):
    """Single retrieved context entry."""

    score: float = Field(default=0.0, description="Similarity score (0.0-1.0)")
    text: str = Field(default="", description="Chunk text")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Vector metadata")
