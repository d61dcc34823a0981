"""
Pipeline result model for document processing.

Represents the outcome of processing a document through the pipeline.

Dependencies: pydantic
System role: Return type for DocumentPipeline.process()
"""

from typing import Any

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    chunk_count: int = Field(description="Number of chunks generated")
    embedding_count: int = Field(description="Number of chunks with a generated embedding")
    failed_embedding_count: int = Field(
        default=0,
        description="Number of chunks whose embedding batch failed",
    )
    stored: bool = Field(description="Whether the vector store accepted the records")
    structured_data: dict[str, Any] = Field(description="Structured document as stored")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
