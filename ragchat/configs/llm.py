"""
LLM provider configuration settings.

Manages OpenAI (embeddings + chat) and OpenRouter (chat + vision) settings.

Dependencies: pydantic, pydantic_settings
System role: Model provider configuration for embedding and completion calls
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class OpenAISettings(BaseSettings):
    """OpenAI API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENAI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="OpenAI API key")
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible API base URL",
    )
    embedding_model: str = Field(
        default="text-embedding-3-large",
        description="Embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the Pinecone index)",
    )
    chat_model: str = Field(default="gpt-4-turbo", description="Default chat model")
    request_timeout: float = Field(default=60.0, description="HTTP timeout in seconds")


class OpenRouterSettings(BaseSettings):
    """OpenRouter API configuration (chat and vision extraction)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENROUTER_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="OpenRouter API key")
    base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenRouter API base URL",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        description="Value sent as HTTP-Referer for OpenRouter attribution",
    )
    app_title: str = Field(
        default="MusTax AI Chatbot",
        description="Value sent as X-Title for OpenRouter attribution",
    )
    chat_model: str = Field(
        default="anthropic/claude-3-opus",
        description="Default chat model routed through OpenRouter",
    )
    vision_model: str = Field(
        default="google/gemini-pro-vision",
        description="Vision model used for document text extraction",
    )
    vision_max_tokens: int = Field(
        default=2000,
        description="Max tokens for the vision extraction reply",
    )
    request_timeout: float = Field(default=60.0, description="HTTP timeout in seconds")
