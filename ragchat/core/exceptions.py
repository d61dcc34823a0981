"""
Exception hierarchy for the RAG chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagChatException(Exception):
    """Base exception for all RAG chat application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnauthorizedError(RagChatException):
    """Raised when the request carries no authenticated user."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class BadInputError(RagChatException):
    """Raised when request input is missing or invalid."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize bad input error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class UpstreamError(RagChatException):
    """Raised when a model provider returns a non-success response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream error.

        Args:
            message: Error message
            status_code: HTTP status returned by the provider
            body: Raw response body returned by the provider
            provider: Provider name ("openai", "openrouter")
            details: Additional context
        """
        self.status_code = status_code
        self.body = body
        self.provider = provider
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class UpstreamQuotaExceededError(UpstreamError):
    """Raised when the provider rejects a call for billing or credit reasons."""

    pass


class ExtractionError(RagChatException):
    """Raised when no text can be extracted from a provider response."""

    pass


class DocumentProcessingError(RagChatException):
    """Raised when an uploaded document cannot be processed."""

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            file_name: Name of the uploaded file
            details: Additional context
        """
        details = details or {}
        if file_name:
            details["file_name"] = file_name
        super().__init__(message, details)


class VectorStoreError(RagChatException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
