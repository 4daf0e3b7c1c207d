"""Tests for logging configuration."""

import json
import logging
import sys
from unittest.mock import patch

from src.config import Environment, Settings
from src.logging_config import (
    DevFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Test message", level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=level,
        pathname="/app/module.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_format_basic_message(self) -> None:
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert data["file"] == "/app/module.py:42"
        assert "timestamp" in data
        assert "extra" not in data

    def test_format_includes_extra_fields(self) -> None:
        """Fields passed via extra= are nested under 'extra'."""
        data = json.loads(JSONFormatter().format(_record(collection="music_reviews", top_k=10)))

        assert data["extra"] == {"collection": "music_reviews", "top_k": 10}

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = _record("Error", logging.ERROR)
        record.exc_info = exc_info
        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]


class TestDevFormatter:
    """Tests for development formatter."""

    def test_format_includes_level(self) -> None:
        output = DevFormatter().format(_record("Warning message", logging.WARNING))

        assert "WARNING" in output
        assert "test" in output
        assert "Warning message" in output

    def test_format_appends_extra(self) -> None:
        output = DevFormatter().format(_record("Searching", user_id="local"))
        assert output.endswith("| user_id=local")


class TestSetupLogging:
    """Tests for logging setup."""

    def test_returns_root_logger(self) -> None:
        logger = setup_logging(level="INFO", json_output=False)
        assert logger is logging.getLogger()

    def test_uses_json_in_production(self) -> None:
        mock_settings = Settings(environment=Environment.PRODUCTION)

        with patch("src.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_uses_dev_formatter_in_development(self) -> None:
        mock_settings = Settings(environment=Environment.DEVELOPMENT)

        with patch("src.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, DevFormatter)

    def test_level_override(self) -> None:
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_quiets_model_loggers(self) -> None:
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger("sentence_transformers").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    def test_returns_named_logger(self) -> None:
        logger = get_logger("reviews.module")
        assert logger.name == "reviews.module"
