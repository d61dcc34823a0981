"""
Document service orchestrator.

Coordinates vision text extraction, the ingestion pipeline and scoped
deletion of a user's document vectors.

Dependencies: ragchat.boundary.llm, ragchat.boundary.vdb, ragchat.core
System role: Document management orchestration
"""

import base64
import logging

from ragchat.boundary.llm.completion_client import ChatCompletionClient
from ragchat.boundary.vdb.pinecone_store import PineconeVectorStore
from ragchat.configs.llm import OpenRouterSettings
from ragchat.core.document_processing.configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from ragchat.core.document_processing.entrypoint import DocumentPipeline
from ragchat.core.exceptions import (
    BadInputError,
    DocumentProcessingError,
    RagChatException,
)
from ragchat.models.document import DocumentUploadResponse

logger = logging.getLogger(__name__)

VISION_PROMPT = (
    "Extract all the text content from this document. Format it as plain text, "
    "preserving paragraphs and important structure. Identify section headers and "
    "important information. Ignore watermarks, headers, footers, and page numbers."
)
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def to_data_uri(data: bytes, content_type: str | None) -> str:
    """Encode file bytes as a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type or DEFAULT_CONTENT_TYPE};base64,{encoded}"


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: extraction, ingestion, deletion.
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        vector_store: PineconeVectorStore,
        vision_client: ChatCompletionClient,
        vision_settings: OpenRouterSettings,
        settings: DocumentPipelineSettings | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            pipeline: Ingestion pipeline (structure, chunk, embed, store)
            vector_store: Vector store used for deletion
            vision_client: Completion client used for text extraction
            vision_settings: Vision model and token limit
            settings: Pipeline settings (uses defaults if None)
        """
        self._pipeline = pipeline
        self._vector_store = vector_store
        self._vision_client = vision_client
        self._vision_settings = vision_settings
        self._settings = settings or get_pipeline_settings()

    async def extract_text(self, data: bytes, content_type: str | None) -> str:
        """
        Extract document text with the vision model.

        Raises:
            UpstreamQuotaExceededError: Provider is out of credits
            UpstreamError: Vision API returned an error
            ExtractionError: Reply contained no text
        """
        return await self._vision_client.send_vision_request(
            to_data_uri(data, content_type),
            VISION_PROMPT,
            model=self._vision_settings.vision_model,
            max_tokens=self._vision_settings.vision_max_tokens,
        )

    async def upload_document(
        self,
        file_name: str,
        data: bytes,
        user_id: str,
        content_type: str | None = None,
    ) -> DocumentUploadResponse:
        """
        Extract, structure, embed and store an uploaded document.

        Steps:
        1. Reject a missing or empty file
        2. Extract text through the vision model
        3. Run the ingestion pipeline
        4. Return counts, preview and structure

        Args:
            file_name: Uploaded file name
            data: Raw file bytes
            user_id: Owner of the document
            content_type: MIME type reported by the client

        Returns:
            DocumentUploadResponse: Upload summary

        Raises:
            BadInputError: No file content
            UpstreamQuotaExceededError: Vision provider is out of credits
            UpstreamError: Vision API returned an error
            ExtractionError: Vision reply contained no text
            DocumentProcessingError: Any other failure
        """
        if not file_name or not data:
            raise BadInputError("No file provided", field="file")

        logger.info(
            f"{__name__}:upload_document - Processing document with Vision API: "
            f"{file_name} ({len(data)} bytes)",
            extra={"user_id": user_id, "content_type": content_type},
        )

        try:
            text = await self.extract_text(data, content_type)
            logger.info(f"{__name__}:upload_document - Extracted {len(text)} characters of text")

            result = await self._pipeline.process(
                text=text,
                file_name=file_name,
                user_id=user_id,
                file_type=content_type,
                file_size=len(data),
            )
        except RagChatException:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:upload_document - {type(e).__name__}: {e}",
                extra={"file_name": file_name, "user_id": user_id},
            )
            raise DocumentProcessingError(
                "Failed to process document",
                file_name=file_name,
                details={"error": str(e)},
            ) from e

        logger.info(
            f"{__name__}:upload_document - Completed in {result.processing_time_ms:.0f}ms",
            extra={
                "file_name": file_name,
                "chunk_count": result.chunk_count,
                "embedding_count": result.embedding_count,
                "stored": result.stored,
            },
        )

        return DocumentUploadResponse(
            text_length=len(text),
            chunks=result.chunk_count,
            embeddings=result.embedding_count,
            preview=text[:self._settings.preview_length] + "...",
            structured_data=result.structured_data,
        )

    async def delete_document(self, file_name: str, user_id: str) -> bool:
        """
        Delete every vector of one user's document.

        Args:
            file_name: Uploaded file name
            user_id: Owner of the document

        Returns:
            bool: True when the delete request succeeded
        """
        logger.info(
            f"{__name__}:delete_document - Deleting vectors for {file_name}",
            extra={"user_id": user_id},
        )
        return await self._vector_store.delete({"fileName": file_name, "userId": user_id})
