"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, ragchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import logging
from ragchat.configs import get_settings
from ragchat.observability import configure_logging
from ragchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from ragchat.api.deps.dependencies import get_service_cache
from ragchat.api.errors import register_exception_handlers
from .routers import (
    chat_router,
    documents_router,
    health_router,
)

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging(get_settings().log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.embedding_task
    _ = cache.vector_store
    _ = cache.document_pipeline
    _ = cache.completion_clients
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="RAG Chat API",
        description="Document-grounded chat for UAE corporate tax questions",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    uvicorn.run(
        "ragchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
