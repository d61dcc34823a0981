"""Tests for the Pinecone vector store adapter with a mocked SDK client."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from ragchat.boundary.vdb.pinecone_store import PineconeVectorStore
from ragchat.configs.vector_store import VectorStoreSettings
from ragchat.core.document_processing.models import EmbeddingRecord


@pytest.fixture
def mock_index() -> MagicMock:
    """Provide mock Pinecone index handle."""
    return MagicMock()


@pytest.fixture
def mock_client(mock_index: MagicMock) -> MagicMock:
    """Provide mock Pinecone client returning mock_index."""
    client = MagicMock()
    client.Index.return_value = mock_index
    return client


@pytest.fixture
def store(vector_store_settings: VectorStoreSettings, mock_client: MagicMock) -> PineconeVectorStore:
    return PineconeVectorStore(settings=vector_store_settings, client=mock_client, poll_interval=0.05)


def _record(i: int, embedding: list[float] | None = None) -> EmbeddingRecord:
    return EmbeddingRecord(
        id=f"id-{i}",
        text=f"chunk {i}",
        embedding=embedding,
        metadata={"fileName": "guide.pdf", "userId": "u1"},
    )


class TestEnsureIndex:
    """Test lazy index handle access."""

    @pytest.mark.asyncio
    async def test_returns_index_handle(self, store, mock_client, mock_index) -> None:
        assert await store.ensure_index() is mock_index
        mock_client.Index.assert_called_once_with("test-index")

    @pytest.mark.asyncio
    async def test_returns_none_on_error(self, store, mock_client) -> None:
        mock_client.Index.side_effect = RuntimeError("no such index")

        assert await store.ensure_index() is None


class TestCreateIndex:
    """Test create_index_if_not_exists."""

    @pytest.mark.asyncio
    async def test_existing_index_is_not_recreated(self, store, mock_client) -> None:
        mock_client.list_indexes.return_value.names.return_value = ["test-index"]

        assert await store.create_index_if_not_exists() is True
        mock_client.create_index.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_index_is_created_and_awaited(self, store, mock_client) -> None:
        mock_client.list_indexes.return_value.names.return_value = []
        mock_client.describe_index.side_effect = [
            SimpleNamespace(status={"ready": False}),
            SimpleNamespace(status={"ready": True}),
        ]

        assert await store.create_index_if_not_exists() is True

        kwargs = mock_client.create_index.call_args.kwargs
        assert kwargs["name"] == "test-index"
        assert kwargs["dimension"] == 1536
        assert kwargs["metric"] == "cosine"
        assert mock_client.describe_index.call_count == 2

    @pytest.mark.asyncio
    async def test_index_never_ready_returns_false(self, store, mock_client) -> None:
        mock_client.list_indexes.return_value.names.return_value = []
        mock_client.describe_index.return_value = SimpleNamespace(status={"ready": False})

        assert await store.create_index_if_not_exists() is False

    @pytest.mark.asyncio
    async def test_api_error_returns_false(self, store, mock_client) -> None:
        mock_client.list_indexes.side_effect = RuntimeError("unauthorized")

        assert await store.create_index_if_not_exists() is False


class TestStore:
    """Test batched upsert."""

    @pytest.mark.asyncio
    async def test_upserts_in_batches_and_skips_missing_embeddings(self, store, mock_index) -> None:
        records = [_record(0, [0.1]), _record(1, None), _record(2, [0.2]), _record(3, [0.3])]

        assert await store.store(records) is True

        assert mock_index.upsert.call_count == 2
        first = mock_index.upsert.call_args_list[0].kwargs
        assert first["namespace"] == ""
        assert [vector["id"] for vector in first["vectors"]] == ["id-0", "id-2"]
        assert first["vectors"][0] == {
            "id": "id-0",
            "values": [0.1],
            "metadata": {"text": "chunk 0", "fileName": "guide.pdf", "userId": "u1"},
        }

    @pytest.mark.asyncio
    async def test_failed_batch_does_not_stop_remaining_batches(self, store, mock_index) -> None:
        mock_index.upsert.side_effect = [RuntimeError("throttled"), None]
        records = [_record(i, [float(i)]) for i in range(4)]

        assert await store.store(records) is True
        assert mock_index.upsert.call_count == 2

    @pytest.mark.asyncio
    async def test_unavailable_index_returns_false(self, store, mock_client) -> None:
        mock_client.Index.side_effect = RuntimeError("down")

        assert await store.store([_record(0, [0.1])]) is False


class TestQuery:
    """Test similarity query and fallback."""

    @pytest.mark.asyncio
    async def test_returns_matches_in_store_order(self, store, mock_index) -> None:
        mock_index.query.return_value = {
            "matches": [
                {"id": "a", "score": 0.9, "metadata": {"text": "first", "fileName": "f.pdf"}},
                {"id": "b", "score": 0.7, "metadata": {"text": "second"}},
            ]
        }

        matches = await store.query([0.1, 0.2], filter={"fileName": "f.pdf", "userId": "u1"})

        assert [(m.score, m.text) for m in matches] == [(0.9, "first"), (0.7, "second")]
        assert matches[0].metadata["fileName"] == "f.pdf"
        kwargs = mock_index.query.call_args.kwargs
        assert kwargs["top_k"] == 3
        assert kwargs["include_metadata"] is True
        assert kwargs["filter"] == {"fileName": "f.pdf", "userId": "u1"}
        assert kwargs["namespace"] == ""

    @pytest.mark.asyncio
    async def test_accepts_sdk_response_objects(self, store, mock_index) -> None:
        mock_index.query.return_value = SimpleNamespace(
            matches=[SimpleNamespace(id="a", score=0.5, metadata={"text": "sdk"})]
        )

        matches = await store.query([0.1], top_k=1)

        assert matches[0].text == "sdk"
        assert mock_index.query.call_args.kwargs["top_k"] == 1

    @pytest.mark.asyncio
    async def test_zero_matches_uses_fallback(self, store, mock_index) -> None:
        mock_index.query.return_value = {"matches": []}

        matches = await store.query([0.5, 0.6])

        assert matches[0].metadata["source"].startswith("fallback-")

    @pytest.mark.asyncio
    async def test_query_error_uses_fallback(self, store, mock_index) -> None:
        mock_index.query.side_effect = RuntimeError("timeout")

        matches = await store.query([0.02, -0.01])

        assert matches[0].metadata == {"source": "fallback-knowledge-base"}

    @pytest.mark.asyncio
    async def test_unavailable_index_uses_fallback(self, store, mock_client) -> None:
        mock_client.Index.side_effect = RuntimeError("down")

        matches = await store.query([0.5])

        assert matches[0].metadata == {"source": "fallback-general-knowledge"}


class TestDeleteAndHealth:
    """Test scoped delete and health probe."""

    @pytest.mark.asyncio
    async def test_delete_by_filter(self, store, mock_index) -> None:
        assert await store.delete({"fileName": "f.pdf", "userId": "u1"}) is True
        mock_index.delete.assert_called_once_with(
            filter={"fileName": "f.pdf", "userId": "u1"},
            namespace="",
        )

    @pytest.mark.asyncio
    async def test_delete_in_explicit_namespace(self, store, mock_index) -> None:
        await store.delete({"fileName": "f.pdf"}, namespace="archive")

        assert mock_index.delete.call_args.kwargs["namespace"] == "archive"

    @pytest.mark.asyncio
    async def test_delete_failure_returns_false(self, store, mock_index) -> None:
        mock_index.delete.side_effect = RuntimeError("denied")

        assert await store.delete({"fileName": "f.pdf"}) is False

    @pytest.mark.asyncio
    async def test_health_check(self, store, mock_index) -> None:
        assert await store.health_check() is True

        mock_index.describe_index_stats.side_effect = RuntimeError("down")
        assert await store.health_check() is False
