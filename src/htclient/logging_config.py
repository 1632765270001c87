import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"


def _handler(handler: logging.Handler, level: int, format_string: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging for the htclient package logger.

    Completion callbacks run on engine threads, so the default format
    includes the thread name.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, replace handlers that are already installed

    Returns:
        The configured "htclient" logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    format_string = format_string or DEFAULT_FORMAT

    logger = logging.getLogger("htclient")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for existing in list(logger.handlers):
            logger.removeHandler(existing)
            existing.close()

        logger.addHandler(_handler(logging.StreamHandler(sys.stdout), numeric_level, format_string))
        if log_file:
            logger.addHandler(_handler(logging.FileHandler(log_file), numeric_level, format_string))

    # Keep records out of the root logger so they are not printed twice
    logger.propagate = False

    return logger
