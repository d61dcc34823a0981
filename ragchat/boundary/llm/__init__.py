"""
LLM boundary layer.

Provides the OpenAI-compatible chat completion client and the response
decoder that normalizes provider replies to text.

Dependencies: httpx
System role: Model provider adapter
"""

from ragchat.boundary.llm.completion_client import (
    ChatCompletionClient,
    create_openai_client,
    create_openrouter_client,
)
from ragchat.boundary.llm.response_decoder import (
    DecodedResponse,
    ResponseShape,
    decode_response,
    extract_text,
)

__all__ = [
    "ChatCompletionClient",
    "create_openai_client",
    "create_openrouter_client",
    "DecodedResponse",
    "ResponseShape",
    "decode_response",
    "extract_text",
]
