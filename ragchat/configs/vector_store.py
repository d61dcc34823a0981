"""
Vector store configuration settings.

Manages Pinecone configuration for vector storage and retrieval.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Pinecone vector store configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PINECONE_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Pinecone API key")
    index_name: str = Field(default="op1", description="Pinecone index name")
    namespace: str = Field(
        default="",
        description="Namespace for upsert/query (empty string = default namespace)",
    )

    # Serverless index spec (used only when creating the index)
    cloud: str = Field(default="aws", description="Serverless cloud provider")
    region: str = Field(default="us-east-1", description="Serverless region")
    metric: str = Field(default="cosine", description="Similarity metric")
    dimension: int = Field(default=1536, description="Index vector dimension")
    index_ready_timeout: int = Field(
        default=60,
        description="Seconds to wait for a newly created index to become ready",
    )

    upsert_batch_size: int = Field(default=100, description="Vectors per upsert call")
    top_k: int = Field(default=5, description="Number of top results to retrieve")
