"""
Provider-agnostic chat response decoder.

Model providers return completion text in different places. Each known
response shape has a decoder; decoders are tried in ResponseShape order and
the first one yielding non-empty text wins.

Dependencies: pydantic, ragchat.core.exceptions, ragchat.observability
System role: Text normalization for chat completion and vision replies
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ragchat.core.exceptions import ExtractionError
from ragchat.observability.log_utils import preview_json

logger = logging.getLogger(__name__)

MIN_SEARCH_STRING_LENGTH = 10
GENERIC_TEXT_FIELDS = ("text", "response", "output", "generated_text")


class ResponseShape(str, Enum):
    """Known response layouts, in decoding priority order."""

    OPENAI_MESSAGE = "openai_message"
    OPENROUTER_TEXT = "openrouter_text"
    ANTHROPIC_CONTENT = "anthropic_content"
    GEMINI_CANDIDATE = "gemini_candidate"
    GENERIC_FIELD = "generic_field"
    STRING_SEARCH = "string_search"


class DecodedResponse(BaseModel):
    """Extracted text and the shape it was found in."""

    model_config = ConfigDict(frozen=True)

    shape: ResponseShape
    text: str


def _non_empty(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def _decode_openai_message(data: dict) -> str | None:
    choice = _first(data.get("choices"))
    if not isinstance(choice, dict) or not isinstance(choice.get("message"), dict):
        return None
    return _non_empty(choice["message"].get("content"))


def _decode_openrouter_text(data: dict) -> str | None:
    choice = _first(data.get("choices"))
    if isinstance(choice, str):
        return _non_empty(choice)
    if not isinstance(choice, dict):
        return None
    return _non_empty(choice.get("text"))


def _decode_anthropic_content(data: dict) -> str | None:
    content = data.get("content")
    if isinstance(content, str):
        return _non_empty(content)
    if isinstance(content, list):
        texts = [
            block["text"]
            for block in content
            if isinstance(block, dict) and isinstance(block.get("text"), str)
        ]
        return _non_empty("".join(texts))
    return None


def _decode_gemini_candidate(data: dict) -> str | None:
    candidate = _first(data.get("candidates"))
    if not isinstance(candidate, dict):
        return None
    content = candidate.get("content")
    if isinstance(content, str):
        return _non_empty(content)
    if isinstance(content, dict):
        part = _first(content.get("parts"))
        if isinstance(part, dict):
            return _non_empty(part.get("text"))
    return None


def _decode_generic_field(data: dict) -> str | None:
    for field in GENERIC_TEXT_FIELDS:
        text = _non_empty(data.get(field))
        if text:
            return text
    return None


def find_string(obj: Any, min_length: int = MIN_SEARCH_STRING_LENGTH) -> str | None:
    """Depth-first search for the first string longer than min_length."""
    if isinstance(obj, dict):
        values = obj.values()
    elif isinstance(obj, list):
        values = obj
    else:
        return None

    for value in values:
        if isinstance(value, str):
            if len(value) > min_length:
                return value
        else:
            found = find_string(value, min_length)
            if found:
                return found
    return None


DECODERS: dict[ResponseShape, Callable[[dict], str | None]] = {
    ResponseShape.OPENAI_MESSAGE: _decode_openai_message,
    ResponseShape.OPENROUTER_TEXT: _decode_openrouter_text,
    ResponseShape.ANTHROPIC_CONTENT: _decode_anthropic_content,
    ResponseShape.GEMINI_CANDIDATE: _decode_gemini_candidate,
    ResponseShape.GENERIC_FIELD: _decode_generic_field,
    ResponseShape.STRING_SEARCH: find_string,
}


def decode_response(data: Any) -> DecodedResponse:
    """
    Locate the completion text in a provider response.

    Args:
        data: Parsed JSON response body

    Returns:
        DecodedResponse: Extracted text with the matching shape

    Raises:
        ExtractionError: When no decoder finds text
    """
    if isinstance(data, dict):
        for shape in ResponseShape:
            text = DECODERS[shape](data)
            if text:
                logger.debug(f"{__name__}:decode_response - Found text in {shape.value} format")
                return DecodedResponse(shape=shape, text=text)

    preview = preview_json(data)
    logger.error(f"{__name__}:decode_response - No text content found in response: {preview}")
    raise ExtractionError(
        "Could not extract text from model response",
        details={"response_preview": preview},
    )


def extract_text(data: Any) -> str:
    """Return only the text of decode_response()."""
    return decode_response(data).text
