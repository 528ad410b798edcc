"""
Logging configuration for art-size-reader.

Diagnostic messages (enabled checks, skipped directories, unexpected
failures) go through the standard logging module to stderr. They are kept
separate from the audit output itself: violation lines are written by the
Reporter to the console or the logfile chosen by the user.

The console handler writes through tqdm.write(), so log messages appear
above the in-place progress line instead of tearing it apart.

Usage:
    from art_size_reader.core.logger import setup_logging, get_logger

    setup_logging(verbose=False)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Analyzing file(s) in /music")
"""

import logging
import sys
from typing import TextIO

from tqdm import tqdm


# Log format for console output (compact, tqdm-friendly)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes without breaking tqdm progress lines.

    tqdm redraws its line with carriage returns. A plain StreamHandler
    would append to that line; tqdm.write() clears it first and redraws
    it after the message.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream if stream is not None else sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False, stream: TextIO | None = None, color: bool = True) -> None:
    """
    Configure the logging system for the application.

    Call once at application startup, before the configuration is built,
    so that enabled options are announced.

    Args:
        verbose: Log DEBUG messages (skipped directories, per-file details).
        stream: Output stream for the console handler. Defaults to stderr.
        color: Color the level names with ANSI codes.

    Behavior:
        1. Set the package logger level (INFO, or DEBUG when verbose)
        2. Remove handlers left over from a previous call
        3. Attach a TqdmLoggingHandler
    """
    package_logger = logging.getLogger("art_size_reader")
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    package_logger.propagate = False

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = TqdmLoggingHandler(stream)
    if color:
        console_handler.setFormatter(ColoredConsoleFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    package_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'art_size_reader.audit.walker'.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush and detach the handlers installed by setup_logging().

    Typically called in a finally block at application exit.
    """
    package_logger = logging.getLogger("art_size_reader")

    for handler in package_logger.handlers[:]:
        handler.flush()
        handler.close()
        package_logger.removeHandler(handler)

    package_logger.propagate = True
