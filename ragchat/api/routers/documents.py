"""
Document API endpoints.

Routes:
- POST /documents/upload - Extract, embed and store an uploaded document
- DELETE /documents/{file_name} - Delete the caller's vectors for a document

Dependencies: ragchat.application.services, ragchat.models
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from ragchat.api.deps import get_current_user_id, get_document_service
from ragchat.application.services.document_service import DocumentService
from ragchat.core.exceptions import BadInputError, DocumentProcessingError
from ragchat.models.common import ErrorResponse
from ragchat.models.document import DocumentDeleteResponse, DocumentUploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "No file provided"},
    401: {"model": ErrorResponse, "description": "Missing caller identity"},
    402: {"model": ErrorResponse, "description": "Provider out of credits"},
    500: {"model": ErrorResponse, "description": "Processing failed"},
}


@router.post(
    "/upload",
    response_model=DocumentUploadResponse,
    response_model_by_alias=True,
    responses=ERROR_RESPONSES,
)
async def upload_document(
    file: UploadFile | None = File(default=None),
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentUploadResponse:
    """
    Process an uploaded document into searchable vectors.

    Args:
        file: Multipart file field
        user_id: Caller (X-User-Id)
        document_service: Injected DocumentService

    Returns:
        DocumentUploadResponse: Text length, chunk/embedding counts, preview, structure

    Raises:
        BadInputError(400): No file provided
        UpstreamQuotaExceededError(402): Vision provider out of credits
        RagChatException(500): Vision or processing failure
    """
    if file is None:
        raise BadInputError("No file provided", field="file")

    data = await file.read()
    logger.info(
        f"{__name__}:upload_document - Received {file.filename} ({len(data)} bytes)",
        extra={"user_id": user_id},
    )
    return await document_service.upload_document(
        file_name=file.filename or "",
        data=data,
        user_id=user_id,
        content_type=file.content_type,
    )


@router.delete(
    "/{file_name}",
    response_model=DocumentDeleteResponse,
    response_model_by_alias=True,
    responses=ERROR_RESPONSES,
)
async def delete_document(
    file_name: str,
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDeleteResponse:
    """
    Delete every vector of the caller's document.

    Args:
        file_name: Uploaded file name
        user_id: Caller (X-User-Id)
        document_service: Injected DocumentService

    Returns:
        DocumentDeleteResponse: Deleted file name

    Raises:
        DocumentProcessingError(500): Vector store rejected the delete
    """
    deleted = await document_service.delete_document(file_name, user_id)
    if not deleted:
        raise DocumentProcessingError("Failed to delete document", file_name=file_name)
    return DocumentDeleteResponse(success=True, file_name=file_name)
