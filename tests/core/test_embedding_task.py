"""Tests for batched embedding generation."""

import hashlib

import pytest

from ragchat.core.document_processing.models import Chunk, ChunkType
from ragchat.core.document_processing.tasks.chunking_task import ChunkingTask
from ragchat.core.document_processing.tasks.embedding_task import EmbeddingTask
from ragchat.core.document_processing.tasks.structuring_task import StructuringTask


class TestEmbedTexts:
    """Test EmbeddingTask.embed_texts batching and failure isolation."""

    @pytest.mark.asyncio
    async def test_failed_batch_should_yield_nones_and_continue(self, embeddings_factory) -> None:
        """25 texts, batch size 20, second batch fails: 20 vectors then 5 Nones."""
        embeddings = embeddings_factory(fail_batches={2})
        task = EmbeddingTask(embeddings, batch_size=20)
        texts = [f"text {i}" for i in range(25)]

        result = await task.embed_texts(texts)

        assert len(result) == 25
        assert all(vector is not None for vector in result[:20])
        assert result[20:] == [None] * 5
        assert [len(call) for call in embeddings.calls] == [20, 5]

    @pytest.mark.asyncio
    async def test_first_batch_failure_should_not_stop_later_batches(self, embeddings_factory) -> None:
        embeddings = embeddings_factory(fail_batches={1})
        task = EmbeddingTask(embeddings, batch_size=2)

        result = await task.embed_texts(["a", "bb", "ccc"])

        assert result == [None, None, [3.0, 0.0]]

    @pytest.mark.asyncio
    async def test_output_order_should_match_input(self, embeddings_factory) -> None:
        task = EmbeddingTask(embeddings_factory(), batch_size=2)

        result = await task.embed_texts(["a", "bb", "ccc", "dddd"])

        assert [vector[0] for vector in result] == [1.0, 2.0, 3.0, 4.0]

    @pytest.mark.asyncio
    async def test_batch_size_override(self, embeddings_factory) -> None:
        embeddings = embeddings_factory()
        task = EmbeddingTask(embeddings, batch_size=20)

        await task.embed_texts(["a"] * 5, batch_size=2)

        assert [len(call) for call in embeddings.calls] == [2, 2, 1]

    @pytest.mark.asyncio
    async def test_empty_input_should_make_no_calls(self, embeddings_factory) -> None:
        embeddings = embeddings_factory()

        assert await EmbeddingTask(embeddings).embed_texts([]) == []
        assert embeddings.calls == []

    def test_non_positive_batch_size_should_raise(self, embeddings_factory) -> None:
        with pytest.raises(ValueError):
            EmbeddingTask(embeddings_factory(), batch_size=0)


class TestEmbedQuery:
    """Test EmbeddingTask.embed_query."""

    @pytest.mark.asyncio
    async def test_embed_query_returns_vector(self, embeddings_factory) -> None:
        assert await EmbeddingTask(embeddings_factory()).embed_query("rates?") == [0.1, 0.2, 0.3]

    @pytest.mark.asyncio
    async def test_embed_query_failure_returns_none(self, embeddings_factory) -> None:
        assert await EmbeddingTask(embeddings_factory(fail_query=True)).embed_query("rates?") is None


class TestBuildRecords:
    """Test EmbeddingTask.build_records."""

    def test_records_should_have_deterministic_ids_and_metadata(self, embeddings_factory) -> None:
        task = EmbeddingTask(embeddings_factory())
        chunks = [
            Chunk(type=ChunkType.FULL_CONTENT, index=0, text='{"a":1}'),
            Chunk(type=ChunkType.DOCUMENT, index=1, text='{"b":2}'),
        ]

        records = task.build_records(chunks, [[1.0], None], {"fileName": "guide.pdf", "userId": "u1"})

        expected_id = hashlib.sha256('{"a":1}:u1:guide.pdf:0'.encode()).hexdigest()[:16]
        assert records[0].id == expected_id
        assert len(records[1].id) == 16
        assert records[0].embedding == [1.0]
        assert records[1].embedding is None
        assert records[1].metadata == {
            "fileName": "guide.pdf",
            "userId": "u1",
            "chunkType": "document",
            "chunkIndex": 1,
        }

    def test_same_input_should_give_same_ids(self, embeddings_factory) -> None:
        task = EmbeddingTask(embeddings_factory())
        chunks = [Chunk(type=ChunkType.SECTION, index=1, text="x")]

        first = task.build_records(chunks, [[0.5]], {"fileName": "a.pdf"})
        second = task.build_records(chunks, [[0.9]], {"fileName": "a.pdf"})

        assert first[0].id == second[0].id

    def test_same_document_from_two_users_should_not_share_ids(self, embeddings_factory) -> None:
        """Identical JSON uploads under one file name stay separate per owner."""
        task = EmbeddingTask(embeddings_factory())
        document = StructuringTask().build(
            '{"content": "same doc", "sections": [{"title": "A", "content": "same doc"}]}'
        )
        chunks = ChunkingTask().chunk(document)
        vectors = [[0.1]] * len(chunks)

        alice = task.build_records(chunks, vectors, {"fileName": "guide.json", "userId": "alice"})
        bob = task.build_records(chunks, vectors, {"fileName": "guide.json", "userId": "bob"})

        assert {record.id for record in alice}.isdisjoint(record.id for record in bob)
        assert {record.metadata["userId"] for record in bob} == {"bob"}
