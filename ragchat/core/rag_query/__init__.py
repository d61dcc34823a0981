"""RAG query business logic.

Includes context formatting and chat prompt assembly.
"""

from .context_formatter import format_context_for_prompt
from .rag_prompt import build_messages, build_system_prompt, last_user_message

__all__ = [
    "format_context_for_prompt",
    "build_messages",
    "build_system_prompt",
    "last_user_message",
]
