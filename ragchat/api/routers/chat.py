"""Chat API endpoints.

Routes:
- POST /chat - Answer with retrieved context, or forward the provider SSE stream

Dependencies: ragchat.application.services.chat_service
System role: Chat messaging HTTP API with streaming support
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ragchat.api.deps import get_chat_service, get_current_user_id
from ragchat.application.services.chat_service import ChatService
from ragchat.models.chat import ChatRequest, ChatResponse
from ragchat.models.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post(
    "",
    response_model=ChatResponse,
    responses={
        200: {"content": {"text/event-stream": {}}},
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    request: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Answer the latest user message with RAG context.

    Flow:
    1. Embed the latest user message and query the vector store
    2. Prepend the formatted context as the system prompt
    3. Call the selected provider; stream raw SSE bytes when requested

    Args:
        request: ChatRequest with messages and provider options
        user_id: Caller (X-User-Id)
        chat_service: Injected ChatService

    Returns:
        ChatResponse | StreamingResponse: Reply with contexts, or provider SSE stream
    """
    logger.info(
        f"{__name__}:chat - START provider={request.provider.value} stream={request.stream}",
        extra={"user_id": user_id},
    )

    if request.stream:
        stream = await chat_service.stream_chat(request, user_id)
        return StreamingResponse(
            stream,
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering
            },
        )

    return await chat_service.chat(request, user_id)
