"""
Document domain models and schemas.

Request/response schemas for document upload and deletion.

Dependencies: pydantic
System role: Document API contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentUploadResponse(BaseModel):
    """Response schema for a processed upload."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    text_length: int = Field(alias="textLength", description="Characters of extracted text")
    chunks: int = Field(description="Number of chunks produced")
    embeddings: int = Field(description="Number of chunks with a generated embedding")
    preview: str = Field(description="Leading extracted text followed by '...'")
    structured_data: dict[str, Any] = Field(alias="structuredData")


class DocumentDeleteResponse(BaseModel):
    """Response schema for document deletion."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    file_name: str = Field(alias="fileName")
