"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from ragchat.core.exceptions import (
    RagChatException,
    UnauthorizedError,
    BadInputError,
    UpstreamError,
    UpstreamQuotaExceededError,
    ExtractionError,
    DocumentProcessingError,
    VectorStoreError,
)

__all__ = [
    "RagChatException",
    "UnauthorizedError",
    "BadInputError",
    "UpstreamError",
    "UpstreamQuotaExceededError",
    "ExtractionError",
    "DocumentProcessingError",
    "VectorStoreError",
]
