"""
Application services.

Dependencies: ragchat.boundary, ragchat.core
System role: Use-case orchestration between API and domain
"""

from .chat_service import ChatService
from .document_service import DocumentService

__all__ = ["ChatService", "DocumentService"]
