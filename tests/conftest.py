"""
Shared test fixtures and configuration for entire test suite.

Provides: Embeddings fakes, vector store mocks, completion client mocks,
sample documents
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.embeddings import Embeddings

from ragchat.boundary.vdb.vector_schemas import ContextMatch
from ragchat.configs.vector_store import VectorStoreSettings


class FakeEmbeddings(Embeddings):
    """
    Deterministic embeddings for tests.

    Each text maps to [len(text), position-in-call]; batches listed in
    fail_batches (1-based) raise instead.
    """

    def __init__(self, fail_batches: set[int] | None = None, fail_query: bool = False) -> None:
        self.fail_batches = fail_batches or set()
        self.fail_query = fail_query
        self.calls: list[list[str]] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if len(self.calls) in self.fail_batches:
            raise RuntimeError(f"batch {len(self.calls)} rejected")
        return [[float(len(text)), float(i)] for i, text in enumerate(texts)]

    def embed_query(self, text: str) -> list[float]:
        if self.fail_query:
            raise RuntimeError("query embedding failed")
        return [0.1, 0.2, 0.3]

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        return self.embed_documents(texts)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    """Provide deterministic embeddings client."""
    return FakeEmbeddings()


@pytest.fixture
def vector_store_settings() -> VectorStoreSettings:
    """Provide vector store settings independent of the environment."""
    return VectorStoreSettings(
        api_key="test-key",
        index_name="test-index",
        namespace="",
        upsert_batch_size=2,
        top_k=3,
        index_ready_timeout=1,
    )


@pytest.fixture
def mock_vector_store() -> MagicMock:
    """Provide mock PineconeVectorStore with async methods."""
    store = MagicMock()
    store.index_name = "test-index"
    store.store = AsyncMock(return_value=True)
    store.query = AsyncMock(
        return_value=[
            ContextMatch(score=0.91, text="Registration is via the FTA portal.", metadata={"fileName": "guide.pdf"}),
        ]
    )
    store.delete = AsyncMock(return_value=True)
    store.health_check = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_completion_client() -> MagicMock:
    """Provide mock ChatCompletionClient."""
    client = MagicMock()
    client.complete = AsyncMock(return_value="The standard rate is 9%.")
    client.send_vision_request = AsyncMock(return_value="Extracted text")
    client.stream = AsyncMock()
    return client


@pytest.fixture
def long_document_text() -> str:
    """Provide document text long enough for section splitting."""
    return (
        "SECTION 1: Overview\n"
        "This guide explains how corporate tax applies to businesses operating in the UAE.\n"
        "\n"
        "SECTION 2: Registration\n"
        "Every taxable person must register with the Federal Tax Authority before filing.\n"
        "Registration is completed online through the EmaraTax portal.\n"
    )


@pytest.fixture
def embeddings_factory() -> type[FakeEmbeddings]:
    """Provide the FakeEmbeddings class for tests needing failure setups."""
    return FakeEmbeddings
