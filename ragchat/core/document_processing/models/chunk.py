"""
Chunk domain models for document processing pipeline.

Represents serialized chunks submitted for embedding and the embedding
records written to the vector store.

Dependencies: pydantic
System role: Data structures for chunks in ingestion pipeline
"""

from enum import Enum

from pydantic import BaseModel, Field


class ChunkType(str, Enum):
    """Kind of content a chunk carries."""

    FULL_CONTENT = "full_content"
    SECTION = "section"
    DOCUMENT = "document"


class Chunk(BaseModel):
    """JSON-encoded chunk text with its position in the document."""

    type: ChunkType = Field(description="Chunk kind")
    index: int = Field(description="Position in the chunk sequence")
    text: str = Field(description="JSON-encoded text submitted for embedding")


class EmbeddingRecord(BaseModel):
    """Chunk text with its embedding, ready for upsert."""

    id: str = Field(description="Deterministic record identifier (content hash)")
    text: str = Field(description="Chunk text")
    embedding: list[float] | None = Field(
        default=None,
        description="Embedding vector; None when generation failed for this chunk",
    )
    metadata: dict = Field(default_factory=dict, description="Vector metadata")
