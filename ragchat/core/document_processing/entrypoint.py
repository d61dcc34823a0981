"""
Document pipeline orchestrator.

Coordinates structuring, chunking, embedding and vector store upload for
text extracted from an uploaded document.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, Protocol

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .models import EmbeddingRecord, PipelineResult
from .tasks import ChunkingTask, EmbeddingTask, SectionSplittingTask, StructuringTask

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """Vector store accepted by the pipeline."""

    async def store(self, records: Sequence[EmbeddingRecord]) -> bool: ...


class DocumentPipeline:
    """Orchestrate document ingestion: structure -> chunk -> embed -> upsert."""

    def __init__(
        self,
        embedding_task: EmbeddingTask,
        vector_store: RecordStore,
        settings: DocumentPipelineSettings | None = None,
        structuring_task: StructuringTask | None = None,
        chunking_task: ChunkingTask | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            embedding_task: Embedding generator (shared embeddings client)
            vector_store: Store receiving the embedding records
            settings: Pipeline settings (uses defaults if None)
            structuring_task: Structured-document builder (built from settings if None)
            chunking_task: Chunk producer (default if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._embedding_task = embedding_task
        self._vector_store = vector_store
        self._structuring_task = structuring_task or StructuringTask(
            splitter=SectionSplittingTask(
                min_text_length=self._settings.min_section_text_length,
            ),
            extraction_method=self._settings.extraction_method,
        )
        self._chunking_task = chunking_task or ChunkingTask()

    async def process(
        self,
        text: str,
        file_name: str,
        user_id: str,
        file_type: str | None = None,
        file_size: int | None = None,
    ) -> PipelineResult:
        """
        Process extracted document text through the full pipeline.

        Args:
            text: Text extracted from the uploaded document
            file_name: Uploaded file name (deletion scope together with user_id)
            user_id: Owner of the document
            file_type: MIME type of the uploaded file
            file_size: Size of the uploaded file in bytes

        Returns:
            PipelineResult: Chunk/embedding counts, store outcome and structure
        """
        start_time = time.perf_counter()

        structured = self._structuring_task.build(text)
        chunks = self._chunking_task.chunk(structured)
        logger.info(
            f"{__name__}:process - Created {len(chunks)} JSON chunks from the document",
            extra={"file_name": file_name, "user_id": user_id},
        )

        embeddings = await self._embedding_task.embed_texts(
            [chunk.text for chunk in chunks],
            batch_size=self._settings.embedding_batch_size,
        )

        metadata: dict[str, Any] = {
            "fileName": file_name,
            "fileType": file_type or "",
            "fileSize": file_size or 0,
            "userId": user_id,
            "processedWith": self._settings.processed_with,
            "uploadedAt": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "isJsonStructured": True,
        }
        records = self._embedding_task.build_records(chunks, embeddings, metadata)

        embedding_count = sum(1 for record in records if record.embedding is not None)
        failed_count = len(records) - embedding_count
        if failed_count:
            logger.warning(
                f"{__name__}:process - {failed_count} chunks have no embedding",
                extra={"file_name": file_name, "failed_embedding_count": failed_count},
            )

        stored = False
        if embedding_count:
            stored = await self._vector_store.store(records)
            logger.info(
                f"{__name__}:process - Stored embeddings: {stored}",
                extra={"file_name": file_name, "embedding_count": embedding_count},
            )

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return PipelineResult(
            chunk_count=len(chunks),
            embedding_count=embedding_count,
            failed_embedding_count=failed_count,
            stored=stored,
            structured_data=structured,
            processing_time_ms=elapsed_ms,
        )
