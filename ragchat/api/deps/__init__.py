"""
API dependency injection.

Provides FastAPI dependency functions for service injection.
"""

from ragchat.api.deps.dependencies import (
    get_chat_service,
    get_current_user_id,
    get_document_service,
    get_service_cache,
    get_settings_dependency,
    get_vector_store,
)

__all__ = [
    "get_chat_service",
    "get_current_user_id",
    "get_document_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_vector_store",
]
