# path: sheet_publisher/config/settings.py
"""
Settings - Publisher configuration with validation.
"""

import getpass
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from sheet_publisher.config.constants import DEFAULT_PROPERTIES_DIR
from sheet_publisher.infra.exceptions import ValidationError


class CopyPolicy(str, Enum):
    """How a source sheet lands in the target spreadsheet."""
    REPLACE = "replace"
    RECONCILE = "reconcile"


def default_properties_path() -> Path:
    """Per-user properties file under the home directory."""
    return Path.home() / DEFAULT_PROPERTIES_DIR / f"{getpass.getuser()}.properties.json"


@dataclass
class Settings:
    """
    Publisher settings loaded from environment variables.
    """

    google_credentials_path: str = "credentials.json"
    source_spreadsheet_id: str = ""
    properties_path: str = ""

    copy_policy: CopyPolicy = CopyPolicy.REPLACE

    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None

    environment: str = "development"

    def __post_init__(self):
        """Validate settings after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Normalize and validate field values."""
        if not isinstance(self.copy_policy, CopyPolicy):
            try:
                self.copy_policy = CopyPolicy(str(self.copy_policy).strip().lower())
            except ValueError:
                raise ValidationError(
                    f"Unknown copy policy: {self.copy_policy!r} "
                    f"(expected one of: {', '.join(p.value for p in CopyPolicy)})",
                    field="copy_policy",
                    value=self.copy_policy
                )

        if not self.properties_path:
            self.properties_path = str(default_properties_path())

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            google_credentials_path=os.getenv(
                "GOOGLE_CREDENTIALS_PATH",
                "credentials.json"
            ),
            source_spreadsheet_id=os.getenv("SOURCE_SPREADSHEET_ID", ""),
            properties_path=os.getenv("PUBLISHER_PROPERTIES_PATH", ""),
            copy_policy=os.getenv("PUBLISHER_COPY_POLICY", CopyPolicy.REPLACE.value),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE"),
            environment=os.getenv("ENVIRONMENT", "development")
        )

    def to_dict(self) -> dict:
        """Convert to dictionary (excluding credentials)."""
        return {
            "environment": self.environment,
            "source_spreadsheet_id": self.source_spreadsheet_id,
            "properties_path": self.properties_path,
            "copy_policy": self.copy_policy.value,
            "log_level": self.log_level
        }
