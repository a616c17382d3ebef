# path: sheet_publisher/properties/__init__.py
"""
Properties module - User-scoped publisher configuration.
"""

from sheet_publisher.properties.store import (
    PropertyStore,
    MemoryPropertyStore,
    JsonFilePropertyStore
)
from sheet_publisher.properties.config_store import ConfigStore, PublishConfig

__all__ = [
    "PropertyStore",
    "MemoryPropertyStore",
    "JsonFilePropertyStore",
    "ConfigStore",
    "PublishConfig"
]
