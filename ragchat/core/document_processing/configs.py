"""
Configuration settings for document processing pipeline.

Provides environment-based configuration for section splitting, chunk
embedding and upload response shaping.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Section splitting
    min_section_text_length: int = Field(
        default=200,
        description="Texts shorter than this are kept as a single 'Content' section",
    )
    extraction_method: str = Field(
        default="vision-api",
        description="extractionMethod tag written into document metadata",
    )

    # Embedding settings
    embedding_batch_size: int = Field(
        default=20,
        description="Texts per embeddings API call during ingestion",
    )
    processed_with: str = Field(
        default="vision-json",
        description="processedWith tag attached to every stored vector",
    )

    # Upload response
    preview_length: int = Field(
        default=200,
        description="Characters of extracted text returned as preview",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
