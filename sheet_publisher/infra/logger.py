# path: sheet_publisher/infra/logger.py
"""
Logger - Logging setup for the publisher CLI.

Log records go to stderr so they never interleave with the tables and
alerts the CLI prints on stdout.
"""

import functools
import logging
import sys
import time
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Client libraries that log every HTTP round trip at INFO/DEBUG
QUIET_LOGGERS = ("googleapiclient", "google.auth", "urllib3")


class ColorFormatter(logging.Formatter):
    """Colors the level name on a terminal."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name; unknown names fall back to INFO
        log_file: Also write records to this file
        format_string: Record format, defaults to DEFAULT_FORMAT
        force: Replace handlers installed by an earlier call
    """
    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    format_string = format_string or DEFAULT_FORMAT

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    stream = logging.StreamHandler(sys.stderr)
    formatter_cls = ColorFormatter if sys.stderr.isatty() else logging.Formatter
    stream.setFormatter(formatter_cls(format_string))
    root_logger.addHandler(stream)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Logs how long a block took, or how it failed.

    Keyword arguments are appended to both messages, e.g.
    ``LogContext(logger, "publish", target="abc")``.
    """

    def __init__(self, logger: logging.Logger, operation: str, **context):
        self.logger = logger
        self.operation = operation
        self.context = context
        self._started = 0.0

    def _describe(self) -> str:
        if not self.context:
            return self.operation
        pairs = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.operation} ({pairs})"

    def __enter__(self):
        self._started = time.monotonic()
        self.logger.debug(f"Starting {self._describe()}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.monotonic() - self._started
        if exc_type:
            self.logger.error(f"Failed {self._describe()} after {elapsed:.2f}s: {exc_val}")
        else:
            self.logger.info(f"Completed {self._describe()} in {elapsed:.2f}s")
        return False


def log_function_call(logger: logging.Logger):
    """Decorator that logs entry and failures of a publisher operation."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(f"Calling {func.__name__}")
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in {func.__name__}: {e}")
                raise

        return wrapper

    return decorator
