"""
Structured document domain models.

Canonical record built from extracted document text: full content, metadata
and ordered titled sections.

Dependencies: pydantic
System role: Data structures for the section-splitting stage of ingestion
"""

from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """Titled span of document text, in reading order."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Detected header text, or 'Introduction'/'Content'")
    content: str = Field(description="Newline-joined body lines of the section")


class DocumentMetadata(BaseModel):
    """Extraction metadata for a structured document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    extraction_method: str = Field(alias="extractionMethod")
    extraction_date: str = Field(alias="extractionDate", description="ISO-8601 timestamp")
    content_type: str | None = Field(default=None, alias="contentType")
    section_count: int | None = Field(default=None, alias="sectionCount")
    error: str | None = Field(default=None, description="Set only on the degraded structure")


class StructuredDocument(BaseModel):
    """Full text, metadata and sections of one uploaded document."""

    model_config = ConfigDict(frozen=True)

    content: str
    metadata: DocumentMetadata
    sections: tuple[Section, ...]

    def to_dict(self) -> dict:
        """Serialize with camelCase metadata keys, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
