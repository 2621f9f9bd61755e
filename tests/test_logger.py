"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from exportdocs.utils.logger import configure_logging, get_logger

LOGGER_NAME = "exportdocs.tests.logging"


@pytest.fixture
def cleanup():
    yield
    logging.getLogger(LOGGER_NAME).handlers.clear()


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_rich_handler(self, cleanup):
        """Test that a rich handler is installed by default."""
        logger = configure_logging("DEBUG", logger_name=LOGGER_NAME)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_plain_handler(self, cleanup):
        """Test the plain stream handler with a custom format."""
        logger = configure_logging("warning", rich_output=False, format_string="%(message)s", logger_name=LOGGER_NAME)
        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert not isinstance(logger.handlers[0], RichHandler)
        assert logger.handlers[0].formatter._fmt == "%(message)s"

    def test_reconfigure_replaces_handler(self, cleanup):
        """Test that configuring twice does not stack handlers."""
        configure_logging("INFO", logger_name=LOGGER_NAME)
        logger = configure_logging("INFO", logger_name=LOGGER_NAME)
        assert len(logger.handlers) == 1

    def test_invalid_level(self):
        """Test that an unknown level is rejected."""
        with pytest.raises(ValueError):
            configure_logging("VERBOSE", logger_name=LOGGER_NAME)


class TestGetLogger:
    """Test suite for get_logger."""

    def test_named(self):
        """Test that the named logger is returned."""
        assert get_logger("exportdocs.api") is logging.getLogger("exportdocs.api")

    @pytest.mark.parametrize("name", ["", None])
    def test_invalid_name(self, name):
        """Test that empty names are rejected."""
        with pytest.raises(ValueError):
            get_logger(name)
