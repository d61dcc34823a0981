"""
API layer.

FastAPI application factory, routers, dependency injection and error mapping.
"""
