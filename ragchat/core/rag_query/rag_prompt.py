"""
RAG chat system prompt.

Defines the system prompt for the UAE corporate tax assistant and assembles
the message list sent to the chat completion provider.

Dependencies: langchain_core.prompts
System role: Prompt template for RAG chat behavior
"""

from typing import Any

from langchain_core.prompts import PromptTemplate

SYSTEM_PROMPT = """You are MusTax AI, an assistant for UAE corporate tax questions.

## Instructions
1. Answer using the provided context whenever it is relevant
2. If the context doesn't contain enough information, say so clearly
3. Mention which context block supports each important claim
4. Be concise but thorough in your explanations
5. Do not present general knowledge as if it came from the user's documents

## Context
{context}"""

NO_CONTEXT = "No relevant context was found for this question."

SYSTEM_PROMPT_TEMPLATE = PromptTemplate.from_template(SYSTEM_PROMPT)


def build_system_prompt(context: str) -> str:
    """Render the system prompt around a formatted context block."""
    return SYSTEM_PROMPT_TEMPLATE.format(context=context or NO_CONTEXT)


def build_messages(
    messages: list[dict[str, Any]],
    context: str,
) -> list[dict[str, Any]]:
    """
    Prepend the context-bearing system prompt to the conversation.

    Caller-supplied system messages are dropped.

    Args:
        messages: Conversation messages ({role, content})
        context: Output of format_context_for_prompt()

    Returns:
        list: Messages ready for the chat completion API
    """
    conversation = [message for message in messages if message.get("role") != "system"]
    return [{"role": "system", "content": build_system_prompt(context)}, *conversation]


def last_user_message(messages: list[dict[str, Any]]) -> str | None:
    """Text of the most recent user message, if any."""
    for message in reversed(messages):
        if message.get("role") == "user" and isinstance(message.get("content"), str):
            return message["content"]
    return None
