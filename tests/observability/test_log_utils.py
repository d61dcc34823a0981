"""Tests for safe logging helpers."""

import logging

from ragchat.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    preview_json,
    safe_log_value,
)


class TestSafeLogValue:
    """Tests for safe_log_value."""

    def test_none(self) -> None:
        assert safe_log_value(None) == "None"

    def test_collections_are_summarised(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value(["a.pdf", "b.pdf"]) == "list(2 items)"

    def test_embedding_vector_is_reduced_to_dimension(self) -> None:
        assert safe_log_value([0.01] * 1536) == "vector(1536 dims)"

    def test_filter_keeps_key_names_only(self) -> None:
        result = safe_log_value({"userId": "user-1", "fileName": "guide.pdf"})
        assert result == "dict(keys=['fileName', 'userId'])"
        assert "user-1" not in result

    def test_long_strings_are_truncated(self) -> None:
        result = safe_log_value("x" * 20, max_length=5)
        assert result == "xxxxx... (truncated, 20 total)"


class TestPreviewJson:
    """Tests for preview_json."""

    def test_short_payload_is_unchanged(self) -> None:
        assert preview_json({"a": 1}) == '{"a": 1}'

    def test_long_payload_is_cut(self) -> None:
        result = preview_json({"text": "y" * 50}, max_length=10)
        assert result == '{"text": "...'
        assert len(result) == 13


def test_log_with_context_attaches_safe_extra(caplog) -> None:
    logger = logging.getLogger("ragchat.tests.log_utils")
    with caplog.at_level(logging.INFO, logger="ragchat.tests.log_utils"):
        log_with_context(logger, logging.INFO, "query done", filter={"fileName": "a.pdf"}, top_k=5)

    record = caplog.records[-1]
    assert record.getMessage() == "query done"
    assert record.filter == "dict(keys=['fileName'])"
    assert record.top_k == "5"


def test_log_exception_with_context_records_error_type(caplog) -> None:
    logger = logging.getLogger("ragchat.tests.log_utils")
    with caplog.at_level(logging.ERROR, logger="ragchat.tests.log_utils"):
        log_exception_with_context(logger, "failed", ValueError("bad"), status_code=500)

    record = caplog.records[-1]
    assert record.error_type == "ValueError"
    assert record.error_msg == "bad"
    assert record.status_code == "500"
