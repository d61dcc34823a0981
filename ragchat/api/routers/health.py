"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: ragchat.boundary
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ragchat.api.deps import get_vector_store
from ragchat.boundary.vdb.pinecone_store import PineconeVectorStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check_vector_store(
    vector_store: PineconeVectorStore = Depends(get_vector_store),
):
    """Vector store health check."""
    if not await vector_store.health_check():
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                message=f"Vector store index '{vector_store.index_name}' unavailable",
            ).model_dump(),
        )
    return HealthResponse(status="healthy", message="Vector store accessible")
