"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, parse_level, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("test")
        assert logger.name == "test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "designgen"

    @pytest.mark.unit
    def test_child_logger_nests_under_default(self) -> None:
        """Dotted names become children of the project logger."""
        logger = get_logger("designgen.lowering")
        assert logger.parent is get_logger()

    @pytest.mark.unit
    def test_setup_logging(self) -> None:
        """Verify logging setup."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op once logging is configured, so only the
        # API contract is checked here.
        assert logger.level == logging.NOTSET


class TestParseLevel:
    """Tests for level name parsing."""

    @pytest.mark.unit
    def test_named_levels(self) -> None:
        """Level names are case-insensitive."""
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("WARNING") == logging.WARNING

    @pytest.mark.unit
    def test_unknown_level_uses_default(self) -> None:
        """Unknown names fall back to the default."""
        assert parse_level("chatty") == logging.INFO
        assert parse_level(None, default=logging.ERROR) == logging.ERROR

    @pytest.mark.unit
    def test_numeric_passthrough(self) -> None:
        """Numeric levels are returned unchanged."""
        assert parse_level(logging.CRITICAL) == logging.CRITICAL
