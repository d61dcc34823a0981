"""
Context formatter for RAG prompts.

Renders retrieved matches into a numbered, prompt-ready text block.

Dependencies: ragchat.boundary.vdb.vector_schemas
System role: Context assembly between retrieval and chat completion
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ragchat.boundary.vdb.vector_schemas import ContextMatch

DEFAULT_SOURCE = "Document"


def _as_match(context: ContextMatch | Mapping[str, Any]) -> ContextMatch:
    if isinstance(context, ContextMatch):
        return context
    return ContextMatch.model_validate(dict(context))


def format_context_for_prompt(contexts: Sequence[ContextMatch | Mapping[str, Any]]) -> str:
    """
    Format matches as '[Context N] (Relevance: XX.X%) source:' blocks.

    The relevance part is omitted for a zero score. Input order is kept.

    Args:
        contexts: Retrieved matches

    Returns:
        str: Blocks joined by a blank line, or "" for no matches
    """
    if not contexts:
        return ""

    blocks = []
    for number, context in enumerate(contexts, start=1):
        match = _as_match(context)
        source = match.metadata.get("source") or DEFAULT_SOURCE
        relevance = f" (Relevance: {match.score * 100:.1f}%)" if match.score else ""
        blocks.append(f"[Context {number}]{relevance} {source}:\n{match.text}\n")

    return "\n".join(blocks)
