# path: sheet_publisher/core/__init__.py
"""
Core module - Registration, publishing and reset.
"""

from sheet_publisher.core.publisher import SheetPublisher, build_publisher_menu
from sheet_publisher.core.results import (
    PublishReport,
    RegistrationResult,
    SheetAction,
    SheetResult
)

__all__ = [
    "SheetPublisher",
    "build_publisher_menu",
    "PublishReport",
    "RegistrationResult",
    "SheetAction",
    "SheetResult"
]
