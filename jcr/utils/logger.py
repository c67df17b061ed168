"""
Logging system for the rule engine.
Provides colored console logs under the "jcr" logger namespace.
"""

import logging
from typing import Optional

# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        # Format a copy so other handlers see the plain record
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


LOGGER_NAME = "jcr"

# Global logger instance
_logger: Optional[logging.Logger] = None


def _create_logger(name: str, level: str) -> logging.Logger:
    """Create a configured logger instance."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColoredFormatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S"
    ))
    logger.addHandler(console_handler)
    return logger


def get_logger(log_level: Optional[str] = None) -> logging.Logger:
    """Get or create the global "jcr" logger.

    The level defaults to the configured JCR_LOG_LEVEL.
    """
    global _logger
    if _logger is None:
        if log_level is None:
            from ..config import get_config
            log_level = get_config().log.level
        _logger = _create_logger(LOGGER_NAME, log_level)
    return _logger


def setup_logger(log_level: str = "INFO") -> logging.Logger:
    """Initialize the logger with custom settings."""
    global _logger
    _logger = _create_logger(LOGGER_NAME, log_level)
    return _logger
