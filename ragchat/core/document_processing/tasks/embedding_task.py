"""
Embedding generation task using OpenAI embeddings via LangChain.

Generates 1536-dimensional vectors in sequential batches. A failed batch
yields None at each of its positions; the remaining batches still run.

Dependencies: langchain_core, langchain_openai, hashlib
System role: Fourth stage of document ingestion pipeline, query embedding
"""

import hashlib
import logging
import math
from typing import Any

from langchain_core.embeddings import Embeddings

from ..models import Chunk, EmbeddingRecord

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate embeddings with per-batch failure isolation."""

    def __init__(self, embeddings: Embeddings, batch_size: int = 20) -> None:
        """
        Initialize embedding task with a shared embeddings client.

        Args:
            embeddings: LangChain embeddings client (constructed once per process)
            batch_size: Texts per embeddings API call

        Raises:
            ValueError: When batch_size is not positive
        """
        if batch_size < 1:
            raise ValueError("batch_size must be positive")

        self._embeddings = embeddings
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def embed_texts(
        self,
        texts: list[str],
        batch_size: int | None = None,
    ) -> list[list[float] | None]:
        """
        Embed texts batch by batch, strictly in sequence.

        Args:
            texts: Texts to embed
            batch_size: Override for the configured batch size

        Returns:
            list: One entry per input text, same order; None where the
                batch containing that text failed
        """
        size = batch_size or self._batch_size
        total_batches = math.ceil(len(texts) / size) if texts else 0
        results: list[list[float] | None] = []

        logger.info(
            f"{__name__}:embed_texts - Generating embeddings for {len(texts)} texts "
            f"in {total_batches} batches"
        )

        for start in range(0, len(texts), size):
            batch = texts[start:start + size]
            batch_number = start // size + 1
            logger.debug(f"{__name__}:embed_texts - Processing batch {batch_number} of {total_batches}")

            try:
                vectors = await self._embeddings.aembed_documents(batch)
                if len(vectors) != len(batch):
                    raise ValueError(
                        f"expected {len(batch)} embeddings, received {len(vectors)}"
                    )
                results.extend(vectors)
            except Exception as e:
                logger.error(
                    f"{__name__}:embed_texts - Batch {batch_number} failed: {type(e).__name__}: {e}",
                    extra={"batch_number": batch_number, "batch_size": len(batch)},
                )
                results.extend([None] * len(batch))

        generated = sum(1 for vector in results if vector is not None)
        if generated < len(texts):
            logger.warning(
                f"{__name__}:embed_texts - Partial embedding failure: "
                f"{len(texts) - generated} of {len(texts)} texts have no embedding"
            )
        else:
            logger.info(f"{__name__}:embed_texts - Generated {generated} embeddings")

        return results

    async def embed_query(self, text: str) -> list[float] | None:
        """
        Embed a single query text.

        Args:
            text: Query text

        Returns:
            list[float] | None: Embedding vector, or None on failure
        """
        try:
            logger.info(f"{__name__}:embed_query - Generating embedding for text ({len(text)} chars)")
            return await self._embeddings.aembed_query(text)
        except Exception as e:
            logger.error(f"{__name__}:embed_query - {type(e).__name__}: {e}")
            return None

    def build_records(
        self,
        chunks: list[Chunk],
        embeddings: list[list[float] | None],
        metadata: dict[str, Any],
    ) -> list[EmbeddingRecord]:
        """
        Pair chunks with their embeddings and per-chunk metadata.

        Args:
            chunks: Chunks in embedding order
            embeddings: embed_texts() output for the chunk texts
            metadata: Document-level metadata (must include fileName and userId)

        Returns:
            list[EmbeddingRecord]: One record per chunk, same order
        """
        file_name = str(metadata.get("fileName", ""))
        user_id = str(metadata.get("userId", ""))
        return [
            EmbeddingRecord(
                id=self._generate_chunk_id(chunk.text, user_id, file_name, chunk.index),
                text=chunk.text,
                embedding=embedding,
                metadata={
                    **metadata,
                    "chunkType": chunk.type.value,
                    "chunkIndex": chunk.index,
                },
            )
            for chunk, embedding in zip(chunks, embeddings)
        ]

    def _generate_chunk_id(self, content: str, user_id: str, file_name: str, index: int) -> str:
        """
        Generate deterministic chunk ID from content, owner, file and position.

        Args:
            content: Chunk text
            user_id: Owner of the document
            file_name: Source file name
            index: Chunk position in the document

        Returns:
            str: First 16 hex chars of SHA-256(content:user_id:file_name:index)
        """
        hash_input = f"{content}:{user_id}:{file_name}:{index}"
        return hashlib.sha256(hash_input.encode()).hexdigest()[:16]
