# path: sheet_publisher/properties/config_store.py
"""
Config store - Typed access to the publisher's user properties.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Optional

from sheet_publisher.config.constants import (
    ALL_PROPERTY_KEYS,
    PROP_FORCE_REPLACE_SHEET,
    PROP_PLACE_FIRST,
    PROP_SRC_SHEETS,
    PROP_TARGET_SPREADSHEET
)
from sheet_publisher.infra.logger import get_logger
from sheet_publisher.infra.exceptions import ConfigurationError
from sheet_publisher.properties.store import PropertyStore


logger = get_logger(__name__)

_MISSING = object()


@dataclass
class PublishConfig:
    """Everything a publish run needs from the stored properties."""
    target_spreadsheet_id: Optional[str] = None
    sheet_names: Optional[List[str]] = None
    place_first: bool = False
    force_replace: bool = False


class ConfigStore:
    """
    Reads and writes the four publisher properties.

    Flags and the sheet list are stored as JSON text, the target id as
    raw text. A key that was never set reads as its default and is never
    parsed.
    """

    def __init__(self, store: PropertyStore):
        self.store = store

    def _load_json(self, key: str, default: Any = _MISSING) -> Any:
        raw = self.store.get_property(key)
        if raw is None:
            return None if default is _MISSING else default

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Stored property {key} is not valid JSON: {e}",
                missing_keys=[key]
            )

    def _load_bool(self, key: str) -> bool:
        value = self._load_json(key, default=False)
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"Stored property {key} must be a boolean, got {value!r}",
                missing_keys=[key]
            )
        return value

    # Target spreadsheet

    def set_target(self, spreadsheet_id: str) -> None:
        self.store.set_property(PROP_TARGET_SPREADSHEET, spreadsheet_id)

    def get_target(self) -> Optional[str]:
        return self.store.get_property(PROP_TARGET_SPREADSHEET)

    def clear_target(self) -> None:
        self.store.delete_property(PROP_TARGET_SPREADSHEET)

    # Place first

    def set_place_first(self, flag: bool) -> None:
        self.store.set_property(PROP_PLACE_FIRST, json.dumps(bool(flag)))

    def get_place_first(self) -> bool:
        return self._load_bool(PROP_PLACE_FIRST)

    def clear_place_first(self) -> None:
        self.store.delete_property(PROP_PLACE_FIRST)

    # Source sheet names

    def set_sheet_names(self, names: List[str]) -> None:
        self.store.set_property(PROP_SRC_SHEETS, json.dumps(list(names)))

    def get_sheet_names(self) -> Optional[List[str]]:
        value = self._load_json(PROP_SRC_SHEETS)
        if value is None:
            return None

        if not isinstance(value, list) or not all(isinstance(n, str) for n in value):
            raise ConfigurationError(
                f"Stored property {PROP_SRC_SHEETS} must be a list of sheet names",
                missing_keys=[PROP_SRC_SHEETS]
            )
        return value

    def clear_sheet_names(self) -> None:
        self.store.delete_property(PROP_SRC_SHEETS)

    # Force replace

    def set_force_replace(self, flag: bool) -> None:
        self.store.set_property(PROP_FORCE_REPLACE_SHEET, json.dumps(bool(flag)))

    def get_force_replace(self) -> bool:
        return self._load_bool(PROP_FORCE_REPLACE_SHEET)

    def clear_force_replace(self) -> None:
        self.store.delete_property(PROP_FORCE_REPLACE_SHEET)

    def load(self) -> PublishConfig:
        """Read all properties into a PublishConfig."""
        return PublishConfig(
            target_spreadsheet_id=self.get_target(),
            sheet_names=self.get_sheet_names(),
            place_first=self.get_place_first(),
            force_replace=self.get_force_replace()
        )

    def clear_all(self) -> None:
        """Delete every publisher property."""
        for key in ALL_PROPERTY_KEYS:
            self.store.delete_property(key)
        logger.info("Cleared all publisher properties")
