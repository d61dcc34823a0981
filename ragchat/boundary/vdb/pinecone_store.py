"""
Pinecone vector store adapter.

Stores chunk embeddings with document metadata, queries by similarity with
optional metadata filtering, and deletes by metadata scope. Query failures
degrade to static fallback context instead of raising.

Dependencies: pinecone, tenacity, fastapi.concurrency, ragchat.configs
System role: Production vector store for RAG ingestion and retrieval
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi.concurrency import run_in_threadpool
from pinecone import Pinecone, ServerlessSpec
from tenacity import Retrying, retry_if_result, stop_after_delay, wait_fixed

from ragchat.boundary.vdb.fallback_context import fallback_context
from ragchat.boundary.vdb.vector_schemas import ContextMatch, VectorRecord
from ragchat.configs.vector_store import VectorStoreSettings
from ragchat.core.document_processing.models import EmbeddingRecord
from ragchat.core.exceptions import VectorStoreError
from ragchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from an SDK response object or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


class PineconeVectorStore:
    """
    Pinecone-backed vector store.

    The SDK is synchronous, so every network call is pushed to the
    threadpool. The client is created lazily on first use.
    """

    def __init__(
        self,
        settings: VectorStoreSettings,
        client: Pinecone | None = None,
        poll_interval: float = 5.0,
    ) -> None:
        """
        Initialize Pinecone vector store.

        Args:
            settings: Vector store settings (index name, namespace, spec)
            client: Pre-built Pinecone client (built from settings if None)
            poll_interval: Seconds between readiness checks after index creation
        """
        self._settings = settings
        self._client = client
        self._poll_interval = poll_interval

    @property
    def index_name(self) -> str:
        return self._settings.index_name

    @property
    def namespace(self) -> str:
        return self._settings.namespace

    def _get_client(self) -> Pinecone:
        if self._client is None:
            logger.info(
                f"{__name__}:_get_client - Initializing Pinecone client",
                extra={"index_name": self.index_name},
            )
            self._client = Pinecone(api_key=self._settings.api_key)
        return self._client

    async def ensure_index(self) -> Any | None:
        """
        Get a handle to the configured index.

        Returns:
            Index handle, or None when the client or index is unavailable
        """
        try:
            client = self._get_client()
            return client.Index(self.index_name)
        except Exception as e:
            logger.error(
                f"{__name__}:ensure_index - {type(e).__name__}: {e}",
                extra={"index_name": self.index_name},
            )
            return None

    def _is_ready(self, name: str) -> bool:
        status = _field(self._get_client().describe_index(name), "status", {})
        return bool(_field(status, "ready", False))

    def _create_index_sync(self) -> bool:
        client = self._get_client()
        existing = client.list_indexes().names()
        if self.index_name in existing:
            logger.info(f"{__name__}:create_index_if_not_exists - Index {self.index_name} already exists")
            return True

        logger.info(
            f"{__name__}:create_index_if_not_exists - Creating index {self.index_name}",
            extra={
                "dimension": self._settings.dimension,
                "metric": self._settings.metric,
                "cloud": self._settings.cloud,
                "region": self._settings.region,
            },
        )
        client.create_index(
            name=self.index_name,
            dimension=self._settings.dimension,
            metric=self._settings.metric,
            spec=ServerlessSpec(cloud=self._settings.cloud, region=self._settings.region),
        )

        retrying = Retrying(
            stop=stop_after_delay(self._settings.index_ready_timeout),
            wait=wait_fixed(self._poll_interval),
            retry=retry_if_result(lambda ready: not ready),
            retry_error_callback=lambda retry_state: False,
            before_sleep=lambda retry_state: logger.info(
                f"{__name__}:create_index_if_not_exists - Waiting for index "
                f"(check {retry_state.attempt_number})"
            ),
        )
        ready = retrying(self._is_ready, self.index_name)
        if not ready:
            logger.warning(
                f"{__name__}:create_index_if_not_exists - Index {self.index_name} not ready "
                f"after {self._settings.index_ready_timeout}s"
            )
        return ready

    async def create_index_if_not_exists(self) -> bool:
        """
        Create the serverless index when missing and wait until it is ready.

        Returns:
            bool: True when the index exists and is ready, False otherwise
        """
        try:
            return await run_in_threadpool(self._create_index_sync)
        except Exception as e:
            logger.error(
                f"{__name__}:create_index_if_not_exists - {type(e).__name__}: {e}",
                extra={"index_name": self.index_name},
            )
            return False

    async def store(self, records: Sequence[EmbeddingRecord]) -> bool:
        """
        Upsert embedding records in batches.

        Records without an embedding are skipped. A failed batch is logged
        and the remaining batches are still sent.

        Args:
            records: Embedding records with text and metadata

        Returns:
            bool: False only when the index is unavailable
        """
        index = await self.ensure_index()
        if index is None:
            logger.error(f"{__name__}:store - Index unavailable, nothing stored")
            return False

        vectors: list[VectorRecord] = []
        for record in records:
            if record.embedding is None:
                logger.warning(
                    f"{__name__}:store - Skipping record without embedding",
                    extra={"record_id": record.id},
                )
                continue
            vectors.append(
                VectorRecord(
                    id=record.id,
                    values=record.embedding,
                    metadata={"text": record.text, **record.metadata},
                )
            )

        batch_size = self._settings.upsert_batch_size
        total_batches = (len(vectors) + batch_size - 1) // batch_size
        logger.info(
            f"{__name__}:store - Storing {len(vectors)} vectors in {total_batches} batches",
            extra={"namespace": self.namespace},
        )

        for start in range(0, len(vectors), batch_size):
            batch = vectors[start:start + batch_size]
            batch_number = start // batch_size + 1
            try:
                await run_in_threadpool(
                    index.upsert,
                    vectors=[vector.model_dump() for vector in batch],
                    namespace=self.namespace,
                )
                logger.info(f"{__name__}:store - Upserted batch {batch_number} of {total_batches}")
            except Exception as e:
                logger.error(
                    f"{__name__}:store - Batch {batch_number} failed: {type(e).__name__}: {e}",
                    extra={"batch_number": batch_number, "batch_size": len(batch)},
                )

        return True

    async def query(
        self,
        embedding: list[float],
        top_k: int | None = None,
        filter: dict[str, Any] | None = None,
    ) -> list[ContextMatch]:
        """
        Query similar vectors, degrading to fallback context.

        Args:
            embedding: Query embedding
            top_k: Number of results (settings default if None)
            filter: Optional metadata filter (e.g. fileName, userId)

        Returns:
            list[ContextMatch]: Matches in store order, or fallback context when
                the index is unavailable, returns nothing, or fails
        """
        top_k = top_k or self._settings.top_k
        try:
            index = await self.ensure_index()
            if index is None:
                raise VectorStoreError("Pinecone index unavailable", operation="query")

            response = await run_in_threadpool(
                index.query,
                vector=embedding,
                top_k=top_k,
                filter=filter,
                include_metadata=True,
                namespace=self.namespace,
            )
            matches = _field(response, "matches") or []
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:query - Found {len(matches)} matches",
                top_k=top_k,
                filter=filter,
            )
            if not matches:
                return fallback_context(embedding)

            results = []
            for match in matches:
                metadata = dict(_field(match, "metadata") or {})
                results.append(
                    ContextMatch(
                        score=float(_field(match, "score") or 0.0),
                        text=str(metadata.get("text", "")),
                        metadata=metadata,
                    )
                )
            return results

        except VectorStoreError as e:
            logger.warning(f"{__name__}:query - {e}, using fallback context")
            return fallback_context(embedding)
        except Exception as e:
            logger.error(
                f"{__name__}:query - {type(e).__name__}: {e}, using fallback context",
                extra={"top_k": top_k},
            )
            return fallback_context(embedding)

    async def delete(self, filter: dict[str, Any], namespace: str | None = None) -> bool:
        """
        Delete every vector matching a metadata filter.

        Args:
            filter: Metadata filter (e.g. {"fileName": ..., "userId": ...})
            namespace: Target namespace (settings default if None)

        Returns:
            bool: True on success
        """
        namespace = self.namespace if namespace is None else namespace
        index = await self.ensure_index()
        if index is None:
            logger.error(f"{__name__}:delete - Index unavailable")
            return False

        try:
            await run_in_threadpool(index.delete, filter=filter, namespace=namespace)
            logger.info(f"{__name__}:delete - Deleted vectors", extra={"filter": filter})
            return True
        except Exception as e:
            logger.error(
                f"{__name__}:delete - {type(e).__name__}: {e}",
                extra={"filter": filter, "namespace": namespace},
            )
            return False

    async def health_check(self) -> bool:
        """Return True when the index answers a stats request."""
        index = await self.ensure_index()
        if index is None:
            return False
        try:
            await run_in_threadpool(index.describe_index_stats)
            return True
        except Exception as e:
            logger.error(f"{__name__}:health_check - {type(e).__name__}: {e}")
            return False
