"""
Unit tests for logging setup helpers.
"""

import logging
import logging.handlers

import pytest

from mintmedia.utils import log_exception, parse_size, setup_logging


@pytest.mark.unit
class TestParseSize:
    """Tests for size strings from config."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("10MB", 10 * 1024 * 1024),
            ("512kb", 512 * 1024),
            (" 1GB ", 1024 * 1024 * 1024),
        ],
    )
    def test_units(self, value, expected):
        assert parse_size(value) == expected

    def test_unknown_or_malformed_uses_default(self):
        assert parse_size("huge", default=7) == 7
        assert parse_size("xMB", default=7) == 7


@pytest.mark.unit
class TestSetupLogging:
    """Tests for handler configuration."""

    def test_file_handler_written_to_directory(self, temp_dir):
        root = setup_logging(
            log_level="DEBUG",
            log_file_name="test.log",
            log_to_console=False,
            log_directory=temp_dir,
        )

        try:
            assert root.level == logging.DEBUG
            assert (temp_dir / "test.log").exists()
            assert any(
                isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers
            )
        finally:
            for handler in list(root.handlers):
                handler.close()
                root.removeHandler(handler)

    def test_log_exception_includes_traceback(self, caplog):
        logger = logging.getLogger("mintmedia.test")

        try:
            raise ValueError("boom")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger="mintmedia.test"):
                log_exception(logger, e, "While testing")

        assert "While testing: boom" in caplog.text
        assert caplog.records[-1].exc_info is not None
