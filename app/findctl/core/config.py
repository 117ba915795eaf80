"""User configuration for findctl.

This module provides the configuration model and I/O functions for
search defaults and session storage.

Configuration is stored in ~/.config/findctl/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from findctl.core.paths import get_config_path, get_sessions_dir

logger = logging.getLogger(__name__)

MIN_DEPTH = 1
MAX_DEPTH = 10


class FindctlConfig(BaseModel):
    """Configuration for searches and saved sessions.

    Attributes:
        default_depth: Depth used when --depth is not given (1-10).
        sessions_dir: Override for the saved sessions directory.
        file_progress_interval: Emit a progress update every N file matches.
        directory_progress_interval: Emit a progress update every N directory matches.
    """

    model_config = ConfigDict(extra="forbid")

    default_depth: Annotated[
        int,
        Field(ge=MIN_DEPTH, le=MAX_DEPTH, description="Default traversal depth (1-10)"),
    ] = 3
    sessions_dir: Annotated[
        Path | None,
        Field(description="Directory for saved sessions (None = XDG state dir)"),
    ] = None
    file_progress_interval: Annotated[
        int,
        Field(ge=1, description="File matches between progress updates"),
    ] = 100
    directory_progress_interval: Annotated[
        int,
        Field(ge=1, description="Directory matches between progress updates"),
    ] = 50

    @property
    def effective_sessions_dir(self) -> Path:
        """Sessions directory to use, falling back to the XDG default."""
        if self.sessions_dir is not None:
            return self.sessions_dir.expanduser()
        return get_sessions_dir()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> FindctlConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated FindctlConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return FindctlConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return FindctlConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: FindctlConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The FindctlConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: FindctlConfig) -> dict[str, object]:
    """Convert FindctlConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are omitted.
    """
    result: dict[str, object] = {
        "default_depth": config.default_depth,
        "file_progress_interval": config.file_progress_interval,
        "directory_progress_interval": config.directory_progress_interval,
    }
    if config.sessions_dir is not None:
        result["sessions_dir"] = str(config.sessions_dir)
    return result


def clamp_depth(depth: int) -> int:
    """Clamp a traversal depth into [MIN_DEPTH, MAX_DEPTH]."""
    return max(MIN_DEPTH, min(MAX_DEPTH, depth))
