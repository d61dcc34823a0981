"""
Vector database boundary layer.

Provides the Pinecone vector store adapter and its static fallback context.
- PineconeVectorStore: Production Pinecone client

Dependencies: pinecone
System role: Vector store adapter for RAG ingestion and retrieval
"""

from ragchat.boundary.vdb.vector_schemas import ContextMatch, VectorRecord
from ragchat.boundary.vdb.fallback_context import fallback_context
from ragchat.boundary.vdb.pinecone_store import PineconeVectorStore

__all__ = [
    "ContextMatch",
    "VectorRecord",
    "fallback_context",
    "PineconeVectorStore",
]
