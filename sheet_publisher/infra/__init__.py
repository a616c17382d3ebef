# path: sheet_publisher/infra/__init__.py
"""
Infra module - Logging and error types shared by the publisher.
"""

from sheet_publisher.infra.logger import setup_logger, get_logger
from sheet_publisher.infra.exceptions import (
    PublisherError,
    ConfigurationError,
    SheetsError,
    SheetNotFoundError,
    ValidationError
)

__all__ = [
    "setup_logger",
    "get_logger",
    "PublisherError",
    "ConfigurationError",
    "SheetsError",
    "SheetNotFoundError",
    "ValidationError"
]
