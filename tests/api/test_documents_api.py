"""
Tests for document API endpoints.

Uses FastAPI dependency overrides with a mocked DocumentService.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from ragchat.api.deps import get_document_service
from ragchat.api.main import create_app
from ragchat.core.exceptions import (
    ExtractionError,
    UpstreamQuotaExceededError,
)
from ragchat.models.document import DocumentUploadResponse

USER_HEADERS = {"X-User-Id": "user-1"}
UPLOAD_URL = "/api/v1/documents/upload"


@pytest.fixture
def mock_document_service():
    service = MagicMock()
    service.upload_document = AsyncMock(
        return_value=DocumentUploadResponse(
            text_length=120,
            chunks=4,
            embeddings=4,
            preview="SECTION 1: Overview...",
            structured_data={"content": "SECTION 1: Overview", "metadata": {}, "sections": []},
        )
    )
    service.delete_document = AsyncMock(return_value=True)
    return service


@pytest.fixture
def client(mock_document_service):
    app = create_app()
    app.dependency_overrides[get_document_service] = lambda: mock_document_service
    return TestClient(app)


def _upload_files():
    return {"file": ("guide.png", b"\x89PNG-bytes", "image/png")}


class TestUploadDocument:
    """Test POST /documents/upload."""

    def test_upload_success_returns_camel_case_summary(self, client, mock_document_service):
        response = client.post(UPLOAD_URL, files=_upload_files(), headers=USER_HEADERS)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "textLength": 120,
            "chunks": 4,
            "embeddings": 4,
            "preview": "SECTION 1: Overview...",
            "structuredData": {"content": "SECTION 1: Overview", "metadata": {}, "sections": []},
        }
        mock_document_service.upload_document.assert_awaited_once_with(
            file_name="guide.png",
            data=b"\x89PNG-bytes",
            user_id="user-1",
            content_type="image/png",
        )

    def test_upload_without_user_header_is_unauthorized(self, client, mock_document_service):
        response = client.post(UPLOAD_URL, files=_upload_files())

        assert response.status_code == 401
        assert response.json()["success"] is False
        mock_document_service.upload_document.assert_not_awaited()

    def test_upload_without_file_is_bad_request(self, client):
        response = client.post(UPLOAD_URL, headers=USER_HEADERS)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "No file provided",
            "details": {"field": "file"},
        }

    def test_upload_quota_exceeded_returns_402(self, client, mock_document_service):
        mock_document_service.upload_document.side_effect = UpstreamQuotaExceededError(
            "Provider rejected request",
            status_code=402,
            body='{"error": {"message": "Insufficient credits"}}',
            provider="openrouter",
        )

        response = client.post(UPLOAD_URL, files=_upload_files(), headers=USER_HEADERS)

        assert response.status_code == 402
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Not enough credits on OpenRouter account")
        assert body["details"] == '{"error": {"message": "Insufficient credits"}}'

    def test_upload_extraction_failure_returns_500(self, client, mock_document_service):
        mock_document_service.upload_document.side_effect = ExtractionError("Could not extract text")

        response = client.post(UPLOAD_URL, files=_upload_files(), headers=USER_HEADERS)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Could not extract text",
            "details": None,
        }


class TestDeleteDocument:
    """Test DELETE /documents/{file_name}."""

    def test_delete_success(self, client, mock_document_service):
        response = client.delete("/api/v1/documents/guide.pdf", headers=USER_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"success": True, "fileName": "guide.pdf"}
        mock_document_service.delete_document.assert_awaited_once_with("guide.pdf", "user-1")

    def test_delete_failure_returns_500(self, client, mock_document_service):
        mock_document_service.delete_document.return_value = False

        response = client.delete("/api/v1/documents/guide.pdf", headers=USER_HEADERS)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to delete document"
        assert body["details"] == {"file_name": "guide.pdf"}

    def test_delete_without_user_header_is_unauthorized(self, client):
        response = client.delete("/api/v1/documents/guide.pdf")
        assert response.status_code == 401
