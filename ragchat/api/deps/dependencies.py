"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: ragchat.configs, ragchat.application, ragchat.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends, Header

from ragchat.configs import Settings, get_settings
from ragchat.application.services import ChatService, DocumentService
from ragchat.boundary.vdb.pinecone_store import PineconeVectorStore
from ragchat.core.exceptions import UnauthorizedError

USER_ID_HEADER = "X-User-Id"


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._embeddings = None
        self._embedding_task = None
        self._vector_store = None
        self._document_pipeline = None
        self._completion_clients = None

    @property
    def embeddings(self):
        """Get cached OpenAI embeddings client."""
        if self._embeddings is None:
            from langchain_openai import OpenAIEmbeddings

            settings = get_settings()
            self._embeddings = OpenAIEmbeddings(
                model=settings.openai.embedding_model,
                dimensions=settings.openai.embedding_dimension,
                api_key=settings.openai.api_key,
                base_url=settings.openai.base_url,
            )
        return self._embeddings

    @property
    def embedding_task(self):
        """Get cached embedding task."""
        if self._embedding_task is None:
            from ragchat.core.document_processing.configs import get_pipeline_settings
            from ragchat.core.document_processing.tasks import EmbeddingTask

            self._embedding_task = EmbeddingTask(
                embeddings=self.embeddings,
                batch_size=get_pipeline_settings().embedding_batch_size,
            )
        return self._embedding_task

    @property
    def vector_store(self) -> PineconeVectorStore:
        """Get cached Pinecone vector store."""
        if self._vector_store is None:
            self._vector_store = PineconeVectorStore(settings=get_settings().vector_store)
        return self._vector_store

    @property
    def document_pipeline(self):
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            from ragchat.core.document_processing.entrypoint import DocumentPipeline

            self._document_pipeline = DocumentPipeline(
                embedding_task=self.embedding_task,
                vector_store=self.vector_store,
            )
        return self._document_pipeline

    @property
    def completion_clients(self):
        """Get cached completion clients keyed by provider."""
        if self._completion_clients is None:
            from ragchat.boundary.llm import create_openai_client, create_openrouter_client

            settings = get_settings()
            self._completion_clients = {
                "openai": create_openai_client(settings.openai),
                "openrouter": create_openrouter_client(settings.openrouter),
            }
        return self._completion_clients

    async def aclose(self) -> None:
        """Close HTTP clients and clear all cached instances."""
        if self._completion_clients:
            for client in self._completion_clients.values():
                await client.aclose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embeddings = None
        self._embedding_task = None
        self._vector_store = None
        self._document_pipeline = None
        self._completion_clients = None


# Global service cache
_service_cache = ServiceCache()

def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """
    Get the authenticated caller's id.

    Session validation happens upstream; the gateway forwards the user id.

    Raises:
        UnauthorizedError: Header missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError()
    return x_user_id.strip()


def get_vector_store() -> PineconeVectorStore:
    """Get the cached vector store."""
    return get_service_cache().vector_store


def get_document_service(
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        settings: Application settings (injected)

    Returns:
        DocumentService: Document service wired to the cached pipeline
    """
    cache = get_service_cache()
    return DocumentService(
        pipeline=cache.document_pipeline,
        vector_store=cache.vector_store,
        vision_client=cache.completion_clients["openrouter"],
        vision_settings=settings.openrouter,
    )


def get_chat_service(
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        settings: Application settings (injected)

    Returns:
        ChatService: Chat service with both completion providers
    """
    cache = get_service_cache()
    return ChatService(
        embedding_task=cache.embedding_task,
        vector_store=cache.vector_store,
        clients=cache.completion_clients,
        top_k=settings.vector_store.top_k,
    )
