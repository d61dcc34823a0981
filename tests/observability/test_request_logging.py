"""Tests for RequestLoggingMiddleware."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ragchat.observability.middleware import RequestLoggingMiddleware

LOGGER_NAME = "ragchat.observability.middleware"


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/api/v1/documents")
    async def documents():
        return {"ok": True}

    @app.get("/api/v1/health")
    async def health():
        return {"status": "healthy"}

    return TestClient(app)


def test_request_is_logged_with_caller_and_status(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        client.get("/api/v1/documents", headers={"X-User-Id": "user-1"})

    record = [r for r in caplog.records if r.name == LOGGER_NAME][-1]
    assert record.getMessage() == "GET /api/v1/documents - 200"
    assert record.levelno == logging.INFO
    assert record.user_id == "user-1"
    assert record.status_code == "200"


def test_health_probe_is_logged_at_debug(client, caplog):
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        client.get("/api/v1/health")

    record = [r for r in caplog.records if r.name == LOGGER_NAME][-1]
    assert record.levelno == logging.DEBUG
    assert record.user_id == "None"
