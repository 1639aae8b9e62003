"""Logging utilities for push-pull feeder package."""

import logging
import sys
from typing import Optional, TextIO

OPERATOR_FORMAT = "%(levelname)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# chatty dependency loggers, kept at WARNING on the operator console
DEPENDENCY_LOGGERS = ("cpppo", "serial")


def setup_logger(name: str, level: str = "INFO",
                 format_string: Optional[str] = None,
                 stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Setup a feeder logger writing to the operator console.

    Calling it again for the same name replaces the handler, so feeders
    created repeatedly in one process don't print every line twice.

    Args:
        name: Logger name
        level: Logging level name; unknown names fall back to INFO
        format_string: Custom format string (timestamped format at DEBUG)
        stream: Output stream, stdout if None

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    if format_string is None:
        format_string = DEBUG_FORMAT if numeric_level <= logging.DEBUG else OPERATOR_FORMAT
    handler.setFormatter(logging.Formatter(format_string))

    logger = logging.getLogger(name)
    logger.handlers = [handler]
    logger.setLevel(numeric_level)
    logger.propagate = False

    return logger


def log_feed_start(logger: logging.Logger, feeder_name: str, tool: str) -> None:
    logger.info(f"FEED STARTING - Feeder '{feeder_name}' for {tool}")


def log_feed_success(logger: logging.Logger, feeder_name: str, x: float, y: float,
                     feed_count: int) -> None:
    """Log successful feed with the pick location handed to the tool."""
    logger.info(f"FEED SUCCESS - Feeder '{feeder_name}' pick at [{x:.3f}, {y:.3f}] - Feed count: {feed_count}")


def log_feed_failure(logger: logging.Logger, error_message: str) -> None:
    """Log feed failure with operator-friendly message."""
    logger.error(f"FEED FAILED - {error_message}")
    logger.error("OPERATOR ACTION REQUIRED - Check tape and sprocket hole calibration")


def log_calibration_status(logger: logging.Logger, success: bool, details: str = "") -> None:
    if success:
        logger.info(f"HOLES CALIBRATED - {details}")
    else:
        logger.warning(f"HOLE CALIBRATION FAILED - {details}")


def suppress_debug_output() -> None:
    """Keep dependency debug chatter off the operator console."""
    for name in DEPENDENCY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
