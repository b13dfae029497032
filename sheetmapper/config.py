"""Runtime settings for sheetmapper.

Settings are read from environment variables, after loading a ``.env`` file
from the working directory when one exists. Values already present in the
environment win over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError

HOME_ENV_VAR = "SHEETMAPPER_HOME"
LOG_LEVEL_ENV_VAR = "SHEETMAPPER_LOG_LEVEL"
STRICT_BOOLEANS_ENV_VAR = "SHEETMAPPER_STRICT_BOOLEANS"

DEFAULT_HOME = Path.home() / "SheetMapper"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

load_dotenv(override=False)


@dataclass(frozen=True)
class MapperSettings:
    """Process-wide settings.

    Attributes:
        home: Workspace root holding ``logs`` and ``out`` directories.
        log_level: Level name applied to the package logger.
        strict_booleans: Whether unknown boolean tokens are coercion errors.
    """

    home: Path
    log_level: str = "INFO"
    strict_booleans: bool = True


def _parse_flag(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    token = raw.strip().lower()
    if token in _TRUTHY:
        return True
    if token in _FALSY:
        return False
    raise ConfigurationError(f"{key} must be a boolean flag, got {raw!r}")


def load_settings() -> MapperSettings:
    """Build settings from the current environment."""

    raw_home = os.getenv(HOME_ENV_VAR)
    home = Path(raw_home).expanduser().resolve() if raw_home else DEFAULT_HOME
    log_level = (os.getenv(LOG_LEVEL_ENV_VAR) or "INFO").strip().upper()
    return MapperSettings(
        home=home,
        log_level=log_level,
        strict_booleans=_parse_flag(STRICT_BOOLEANS_ENV_VAR, True),
    )
