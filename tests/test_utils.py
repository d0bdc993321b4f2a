# tests/test_utils.py

import json
import logging
from unittest.mock import MagicMock, patch

import pytest

from storycomic.utils.error_handler import (
    ComicServiceError,
    ErrorCategory,
    ErrorSeverity,
    ImageGenerationError,
    SegmentationError,
)
from storycomic.utils.logger import ContextFilter, get_logger, setup_logging, summarize_for_logging


class TestContextFilter:
    """ContextFilter tests"""

    def test_filter_adds_default_values(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        assert ContextFilter().filter(record) is True
        assert record.trace_id == 'N/A'
        assert record.node_name == 'N/A'

    def test_filter_preserves_existing_values(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
        record.trace_id = 'abc123'
        record.node_name = 'N02PanelImageNode'

        ContextFilter().filter(record)

        assert record.trace_id == 'abc123'
        assert record.node_name == 'N02PanelImageNode'


class TestSetupLogging:

    def test_missing_config_falls_back_to_basic_config(self, tmp_path):
        with patch('storycomic.utils.logger.logging.basicConfig') as mock_basic:
            setup_logging(tmp_path / "missing.yaml")

        mock_basic.assert_called_once()
        assert mock_basic.call_args.kwargs["level"] == logging.INFO

    def test_invalid_yaml_falls_back_to_basic_config(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("just a string", encoding="utf-8")

        with patch('storycomic.utils.logger.logging.basicConfig') as mock_basic:
            setup_logging(config_file)

        mock_basic.assert_called_once()

    def test_yaml_config_is_applied(self, tmp_path):
        config_file = tmp_path / "logging.yaml"
        config_file.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "handlers:\n"
            "  console_handler:\n"
            "    class: logging.StreamHandler\n"
            "loggers:\n"
            "  storycomic.test_yaml:\n"
            "    level: WARNING\n"
            "    handlers: [console_handler]\n",
            encoding="utf-8",
        )

        with patch('storycomic.utils.logger.logging.config.dictConfig') as mock_dict_config:
            setup_logging(config_file)

        applied = mock_dict_config.call_args.args[0]
        assert applied["loggers"]["storycomic.test_yaml"]["level"] == "WARNING"

    def test_get_logger_is_cached(self):
        assert get_logger("storycomic.cache") is get_logger("storycomic.cache")


class TestSummarizeForLogging:

    def test_truncates_long_strings(self):
        summary = json.loads(summarize_for_logging({"story": "x" * 500}, max_len=10))
        assert summary["story"] == "x" * 10 + "..."

    def test_summarizes_lists_and_dicts(self):
        summary = json.loads(summarize_for_logging({"images": ["a", "b"], "meta": {"k": 1}}))
        assert summary["images"].startswith("[List len=2")
        assert summary["meta"].startswith("{Dict len=1")

    def test_accepts_pydantic_models(self):
        from storycomic.api.schemas import StoryRequest

        summary = json.loads(summarize_for_logging(StoryRequest(story="short")))
        assert summary == {"story": "short"}

    def test_respects_exclude_keys(self):
        summary = json.loads(summarize_for_logging({"a": 1, "secret": "s"}, exclude_keys=["secret"]))
        assert summary == {"a": 1}


class TestErrors:

    def test_to_dict(self):
        error = ComicServiceError("boom", details={"x": 1})
        data = error.to_dict()

        assert data["message"] == "boom"
        assert data["category"] == ErrorCategory.UNKNOWN.value
        assert data["severity"] == ErrorSeverity.MEDIUM.value
        assert data["details"] == {"x": 1}

    def test_external_errors_default_to_external_api_category(self):
        assert SegmentationError("x").category == ErrorCategory.EXTERNAL_API
        assert SegmentationError("x").severity == ErrorSeverity.HIGH

    def test_image_error_records_segment_index(self):
        error = ImageGenerationError("No image generated", segment_index=3)

        assert error.segment_index == 3
        assert error.details["segment_index"] == 3
        assert isinstance(error, ComicServiceError)
