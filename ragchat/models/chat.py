"""
Chat domain models and schemas.

Request/response schemas for RAG chat.

Dependencies: pydantic
System role: Chat API contracts
"""

from enum import Enum

from pydantic import BaseModel, Field

from ragchat.boundary.vdb.vector_schemas import ContextMatch


class ChatProvider(str, Enum):
    """Chat completion provider."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"


class ChatMessage(BaseModel):
    """Single chat message."""

    role: str = Field(description="Message role: 'user', 'assistant' or 'system'")
    content: str = Field(description="Message content")


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    messages: list[ChatMessage] = Field(min_length=1, description="Conversation so far")
    provider: ChatProvider = Field(default=ChatProvider.OPENAI)
    model: str | None = Field(default=None, description="Model ID (provider default if None)")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1500, ge=1)
    stream: bool = Field(default=False, description="Forward the provider SSE stream")
    file_name: str | None = Field(
        default=None,
        description="Restrict retrieval to this uploaded document of the caller",
    )


class ChatResponse(BaseModel):
    """Response schema for non-streaming chat."""

    content: str
    contexts: list[ContextMatch]
