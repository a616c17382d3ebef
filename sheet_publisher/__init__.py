# path: sheet_publisher/__init__.py
"""
Spreadsheet Publisher
Publishes a chosen set of sheets from a source Google spreadsheet into a target one.
"""

__version__ = "1.0.0"

from sheet_publisher.config.settings import Settings
from sheet_publisher.infra.logger import setup_logger

__all__ = ["Settings", "setup_logger", "__version__"]
