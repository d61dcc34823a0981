"""
Chat service orchestrator.

Retrieves context for the latest user message, assembles the RAG prompt and
calls the selected completion provider, streaming or not.

Dependencies: ragchat.boundary.llm, ragchat.boundary.vdb, ragchat.core
System role: Chat orchestration
"""

import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

from ragchat.boundary.llm.completion_client import ChatCompletionClient
from ragchat.boundary.vdb.pinecone_store import PineconeVectorStore
from ragchat.boundary.vdb.vector_schemas import ContextMatch
from ragchat.core.document_processing.tasks import EmbeddingTask
from ragchat.core.exceptions import BadInputError
from ragchat.core.rag_query import (
    build_messages,
    format_context_for_prompt,
    last_user_message,
)
from ragchat.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service orchestrator.

    Holds one completion client per provider.
    """

    def __init__(
        self,
        embedding_task: EmbeddingTask,
        vector_store: PineconeVectorStore,
        clients: Mapping[str, ChatCompletionClient],
        top_k: int = 5,
    ) -> None:
        """
        Initialize chat service.

        Args:
            embedding_task: Embeds the query text
            vector_store: Source of retrieved context
            clients: Completion clients keyed by provider name
            top_k: Matches retrieved per query
        """
        self._embedding_task = embedding_task
        self._vector_store = vector_store
        self._clients = dict(clients)
        self._top_k = top_k

    async def retrieve_context(
        self,
        query: str,
        user_id: str,
        file_name: str | None = None,
    ) -> list[ContextMatch]:
        """
        Get relevant context for a query.

        Args:
            query: User question
            user_id: Caller, used to scope file-restricted retrieval
            file_name: Restrict matches to this document of the caller

        Returns:
            list[ContextMatch]: Matches, or [] when the query cannot be embedded
        """
        logger.info(f"{__name__}:retrieve_context - Getting relevant context for query ({len(query)} chars)")

        embedding = await self._embedding_task.embed_query(query)
        if not embedding:
            logger.error(f"{__name__}:retrieve_context - Failed to generate embedding for query")
            return []

        metadata_filter = {"fileName": file_name, "userId": user_id} if file_name else None
        contexts = await self._vector_store.query(
            embedding,
            top_k=self._top_k,
            filter=metadata_filter,
        )
        logger.info(f"{__name__}:retrieve_context - Found {len(contexts)} relevant contexts")
        return contexts

    def _client_for(self, provider: str) -> ChatCompletionClient:
        client = self._clients.get(provider)
        if client is None:
            raise BadInputError(f"Unsupported provider: {provider}", field="provider")
        return client

    async def _prepare(
        self,
        request: ChatRequest,
        user_id: str,
    ) -> tuple[ChatCompletionClient, list[dict[str, Any]], list[ContextMatch]]:
        client = self._client_for(request.provider.value)
        messages = [message.model_dump() for message in request.messages]

        query = last_user_message(messages)
        if not query:
            raise BadInputError("No user message provided", field="messages")

        contexts = await self.retrieve_context(query, user_id, request.file_name)
        prompt_messages = build_messages(messages, format_context_for_prompt(contexts))
        return client, prompt_messages, contexts

    async def chat(self, request: ChatRequest, user_id: str) -> ChatResponse:
        """
        Answer the latest user message with retrieved context.

        Args:
            request: Chat request
            user_id: Caller

        Returns:
            ChatResponse: Reply text and the contexts used

        Raises:
            BadInputError: Unknown provider or no user message
            UpstreamQuotaExceededError: Provider is out of credits
            UpstreamError: Provider returned an error
            ExtractionError: Reply contained no text
        """
        client, messages, contexts = await self._prepare(request, user_id)
        content = await client.complete(
            messages,
            model=request.model,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
        return ChatResponse(content=content, contexts=contexts)

    async def stream_chat(self, request: ChatRequest, user_id: str) -> AsyncIterator[bytes]:
        """
        Open a streaming answer for the latest user message.

        Returns:
            AsyncIterator[bytes]: Raw provider SSE bytes

        Raises:
            BadInputError: Unknown provider or no user message
            UpstreamQuotaExceededError: Provider is out of credits
            UpstreamError: Provider returned an error
        """
        client, messages, _ = await self._prepare(request, user_id)
        return await client.stream(
            messages,
            model=request.model,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
