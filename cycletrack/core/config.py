"""Tracker configuration.

Settings live in ``cycletrack.json`` inside the tracker's home directory
(the ``--home`` option, ``$CYCLETRACK_HOME``, or the current directory).
A missing file means all defaults.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from cycletrack.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cycletrack.json"
HOME_ENV_VAR = "CYCLETRACK_HOME"


class TrackerConfig(BaseModel):
    """Configuration for a CycleTrack home directory.

    Attributes:
        name: Display name of the tracker.
        currency: Display currency code (no conversion is performed).
        data_file: Entry store, relative to the home directory.
        window_size: Number of cycles in the report window.
        recent_cycles: Cycles kept by the "recent" selection.
        log_level: Logging level name used by the CLI.
    """

    name: str = Field(default="cycletrack", min_length=1)
    currency: str = Field(default="USD", min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")
    data_file: str = "entries.json"
    window_size: int = Field(default=12, ge=1)
    recent_cycles: int = Field(default=8, ge=1)
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def validate_recent_cycles(self) -> "TrackerConfig":
        """Ensure the recent selection fits inside the window."""
        if self.recent_cycles > self.window_size:
            raise ValueError("recent_cycles cannot exceed window_size")
        return self

    def data_path(self, home: Path) -> Path:
        """Absolute path of the entry store."""
        path = Path(self.data_file)
        if path.is_absolute():
            return path
        return home / path


def resolve_home(home: Path | None = None) -> Path:
    """Pick the tracker home directory."""
    if home is not None:
        return home
    env_home = os.environ.get(HOME_ENV_VAR)
    if env_home:
        return Path(env_home)
    return Path.cwd()


def load_config(home: Path | None = None) -> TrackerConfig:
    """Load configuration from a home directory.

    Args:
        home: Home directory, or a path to the config file itself.

    Returns:
        TrackerConfig (defaults if no config file exists).

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    path = resolve_home(home)
    if path.is_dir() or path.suffix != ".json":
        path = path / CONFIG_FILENAME

    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return TrackerConfig()

    try:
        config = TrackerConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config
