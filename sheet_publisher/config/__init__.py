# path: sheet_publisher/config/__init__.py
"""
Config module - Publisher configuration and settings.
"""

from sheet_publisher.config.settings import CopyPolicy, Settings
from sheet_publisher.config.env import load_environment

__all__ = [
    "CopyPolicy",
    "Settings",
    "load_environment"
]
