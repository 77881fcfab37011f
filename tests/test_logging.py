"""Tests for logging utilities."""

import logging
from io import StringIO

from fermalg.fermion import Term
from fermalg.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "fermalg.test_module"


def test_get_logger_keeps_package_names():
    """Test that names inside the package are not prefixed twice."""
    assert get_logger("fermalg.fermion.term").name == "fermalg.fermion.term"
    assert get_logger().name == "fermalg"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging():
    """Test configure_logging function."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)

        logger = get_logger("test_module")
        logger.debug("Debug message")

        output = stream.getvalue()
        assert "Debug message" in output
        assert "[DEBUG] fermalg.test_module" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False


def test_vanishing_commutator_half_is_reported():
    """Test that a vanishing commutator half is logged at INFO."""
    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        halves = Term(1, [True], [0]).get_commutator(Term(2, [True, False], [0, 0]))
    finally:
        configure_logging(level=logging.WARNING)

    assert len(halves) == 1
    output = stream.getvalue()
    assert "creates a vanishing term" in output
    assert "fermalg.fermion.term" in output


def test_quiet_by_default():
    """Test that INFO messages are not emitted at the default level."""
    stream = StringIO()
    try:
        configure_logging(level=logging.WARNING, stream=stream)
        Term(1, [True], [0]).get_commutator(Term(1, [True], [0]))
    finally:
        configure_logging(level=logging.WARNING)
    assert stream.getvalue() == ""
