# path: sheet_publisher/properties/store.py
"""
Property stores - Per-user text key/value storage.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from sheet_publisher.infra.logger import get_logger
from sheet_publisher.infra.exceptions import ConfigurationError


logger = get_logger(__name__)


class PropertyStore:
    """
    Interface of a text-only key/value store.

    ``get_property`` returns None for a key that was never set.
    """

    def get_property(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_property(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete_property(self, key: str) -> None:
        raise NotImplementedError

    def get_keys(self) -> List[str]:
        raise NotImplementedError


class MemoryPropertyStore(PropertyStore):
    """Process-local store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_property(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_property(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Property values must be text, got {type(value).__name__}")
        self._data[key] = value

    def delete_property(self, key: str) -> None:
        self._data.pop(key, None)

    def get_keys(self) -> List[str]:
        return list(self._data)


class JsonFilePropertyStore(PropertyStore):
    """
    Store backed by a JSON object in a per-user file.

    The file is read on every access and rewritten atomically on every
    change.
    """

    def __init__(self, path: str):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read properties file {self.path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Properties file {self.path} must hold a JSON object"
            )

        bad_keys = sorted(k for k, v in data.items() if not isinstance(v, str))
        if bad_keys:
            raise ConfigurationError(
                f"Properties file {self.path} holds non-text values for: "
                f"{', '.join(bad_keys)}",
                missing_keys=bad_keys
            )

        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get_property(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_property(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Property values must be text, got {type(value).__name__}")

        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug(f"Stored property {key}")

    def delete_property(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
            logger.debug(f"Deleted property {key}")

    def get_keys(self) -> List[str]:
        return list(self._read())
