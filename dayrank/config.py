"""Configuration loading for DayRank.

Settings live in ``config.toml`` under the config directory
(``$DAYRANK_HOME`` or ``~/.config/dayrank``)::

    [storage]
    db_path = "~/.config/dayrank/dayrank.db"

    [display]
    sort = "date"
    trend_range = "90"

    [logging]
    level = "INFO"
"""

import logging
import os
from pathlib import Path
from typing import Literal, Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from dayrank.models import SortMode, TrendRange

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


def config_dir() -> Path:
    """Directory holding the config file and default database."""
    env = os.environ.get("DAYRANK_HOME")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".config" / "dayrank"


def config_path() -> Path:
    return config_dir() / "config.toml"


class AppConfig(BaseModel):
    """Validated application settings."""

    db_path: Optional[Path] = Field(default=None, description="SQLite database file")
    sort: SortMode = Field(default="score", description="Default list sort mode")
    trend_range: TrendRange = Field(default="30", description="Default trend range")
    log_level: LogLevel = Field(default="WARNING", description="Logging level")

    model_config = {"frozen": True}

    def resolve_db_path(self) -> Path:
        """Configured database path, or the default one in the config directory."""
        if self.db_path is not None:
            return Path(self.db_path).expanduser()
        return config_dir() / "dayrank.db"


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name)
    return value if isinstance(value, dict) else {}


def _flatten(raw: dict) -> dict:
    storage = _section(raw, "storage")
    display = _section(raw, "display")
    log = _section(raw, "logging")
    values = {
        "db_path": storage.get("db_path"),
        "sort": display.get("sort"),
        "trend_range": str(display["trend_range"]) if "trend_range" in display else None,
        "log_level": str(log["level"]).upper() if "level" in log else None,
    }
    return {k: v for k, v in values.items() if v is not None}


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load settings, falling back to defaults.

    A missing file yields defaults. An unreadable file or invalid values are
    logged and replaced by defaults.

    Args:
        path: Config file path. Defaults to ``config_path()``.

    Returns:
        AppConfig instance.
    """
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Could not read config %s, using defaults: %s", path, e)
        return AppConfig()

    try:
        return AppConfig(**_flatten(raw))
    except ValidationError as e:
        logger.warning("Invalid settings in %s, using defaults: %s", path, e)
        return AppConfig()
