"""Tests for logging utility."""

import logging
from io import StringIO


class TestConfigureLogging:
    """Test that the application logger configures correctly."""

    def test_configure_logging_creates_logger(self):
        """configure_logging should return the application logger."""
        from atlas_fit.utils.logging import configure_logging

        logger = configure_logging()

        assert isinstance(logger, logging.Logger)
        assert logger.name == "atlas_fit"
        assert logger.level == logging.INFO

    def test_configure_logging_respects_level(self):
        """Logger should respect the configured log level."""
        from atlas_fit.utils.logging import configure_logging

        assert configure_logging(level="DEBUG").level == logging.DEBUG
        assert configure_logging(level="warning").level == logging.WARNING
        assert configure_logging(level="nonsense").level == logging.INFO

    def test_reconfiguring_replaces_own_handler_only(self):
        """Repeated calls should not stack handlers or drop foreign ones."""
        from atlas_fit.utils.logging import configure_logging

        logger = configure_logging()
        foreign = logging.StreamHandler(StringIO())
        logger.addHandler(foreign)

        configure_logging(level="DEBUG")
        configure_logging(level="INFO")

        assert foreign in logger.handlers
        assert len(logger.handlers) == 2

    def test_log_output_format(self):
        """Messages should include timestamp, logger name and level."""
        from atlas_fit.utils.logging import configure_logging

        buffer = StringIO()
        logger = configure_logging(level="INFO", stream=buffer)

        logger.info("Test message")

        output = buffer.getvalue()
        assert "atlas_fit - INFO - Test message" in output
        assert ":" in output.split(" - ")[0]

    def test_module_loggers_reach_configured_handler(self):
        """Loggers named after package modules should use the app handler."""
        from atlas_fit.utils.logging import configure_logging

        buffer = StringIO()
        configure_logging(level="DEBUG", stream=buffer)

        logging.getLogger("atlas_fit.scoring.service").debug("scored")

        assert "atlas_fit.scoring.service - DEBUG - scored" in buffer.getvalue()


class TestGetLogger:
    """Test the get_logger convenience function."""

    def test_get_logger_prefixes_bare_names(self):
        """Bare names should become children of the app logger."""
        from atlas_fit.utils.logging import get_logger

        assert get_logger("cli").name == "atlas_fit.cli"

    def test_get_logger_keeps_module_paths(self):
        """Full module paths should not be double-prefixed."""
        from atlas_fit.utils.logging import get_logger

        assert get_logger("atlas_fit.scoring").name == "atlas_fit.scoring"

    def test_get_logger_inherits_level(self):
        """Child loggers should inherit the configured level."""
        from atlas_fit.utils.logging import configure_logging, get_logger

        configure_logging(level="DEBUG")

        assert get_logger("test_module").getEffectiveLevel() == logging.DEBUG
