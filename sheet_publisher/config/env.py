# path: sheet_publisher/config/env.py
"""
Environment - .env loading for the publisher CLI.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from sheet_publisher.infra.logger import get_logger


logger = get_logger(__name__)

_QUOTES = ("'", '"')


def load_environment(env_file: Optional[str] = None) -> Optional[Path]:
    """
    Export KEY=VALUE pairs from a .env file into os.environ.

    Variables that are already set win over the file.

    Args:
        env_file: Path to the file; defaults to .env in the working directory

    Returns:
        The path that was loaded, or None when there is no such file
    """
    env_path = Path(env_file or ".env")
    if not env_path.exists():
        logger.debug(f"No env file at {env_path}")
        return None

    pairs = parse_env_file(env_path)
    for key, value in pairs.items():
        os.environ.setdefault(key, value)

    logger.debug(f"Loaded {len(pairs)} variables from {env_path}")
    return env_path


def parse_env_file(path: Path) -> Dict[str, str]:
    """Read KEY=VALUE lines, skipping comments and lines without '='."""
    pairs = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, _, value = line.partition("=")
        value = value.strip()
        if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
            value = value[1:-1]
        pairs[key.strip()] = value

    return pairs
