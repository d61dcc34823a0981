"""
Exception handlers for the HTTP API.

Maps the application exception hierarchy onto ErrorResponse JSON bodies
and status codes.

Dependencies: fastapi, ragchat.core.exceptions, ragchat.models.common
System role: Error translation at the HTTP boundary
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ragchat.core.exceptions import (
    BadInputError,
    RagChatException,
    UnauthorizedError,
    UpstreamError,
    UpstreamQuotaExceededError,
)
from ragchat.models.common import ErrorResponse
from ragchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

PROVIDER_BILLING = {
    "openai": ("OpenAI", "https://platform.openai.com/settings/organization/billing"),
    "openrouter": ("OpenRouter", "https://openrouter.ai/settings/credits"),
}

# Most specific first
STATUS_CODES: tuple[tuple[type[RagChatException], int], ...] = (
    (UnauthorizedError, 401),
    (BadInputError, 400),
    (UpstreamQuotaExceededError, 402),
    (UpstreamError, 500),
)


def status_code_for(exc: RagChatException) -> int:
    """HTTP status for an application exception (500 when unmapped)."""
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def quota_message(provider: str | None) -> str:
    """Out-of-credits message naming the provider that rejected the call."""
    if provider not in PROVIDER_BILLING:
        return "Not enough credits on the model provider account to process this request."
    name, billing_url = PROVIDER_BILLING[provider]
    return (
        f"Not enough credits on {name} account to process this request. "
        f"Please add credits at {billing_url}"
    )


def error_response(exc: RagChatException) -> ErrorResponse:
    """Build the error body for an application exception."""
    if isinstance(exc, UpstreamQuotaExceededError):
        return ErrorResponse(error=quota_message(exc.provider), details=exc.body)
    return ErrorResponse(error=exc.message, details=exc.details or None)


async def handle_ragchat_exception(request: Request, exc: RagChatException) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        log_exception_with_context(
            logger,
            f"{__name__}:handle_ragchat_exception - {request.method} {request.url.path}",
            exc,
            status_code=status_code,
        )
    else:
        logger.warning(
            f"{__name__}:handle_ragchat_exception - {type(exc).__name__}: {exc.message}",
            extra={"path": request.url.path, "status_code": status_code},
        )
    return JSONResponse(
        status_code=status_code,
        content=error_response(exc).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the application exception handlers to the app."""
    app.add_exception_handler(RagChatException, handle_ragchat_exception)
