"""
melonhatch.config - User Settings
=================================

Settings are optional. When present they are read from a TOML file:

    1. the path given with ``--config``
    2. ``$MELONHATCH_CONFIG``
    3. ``~/.config/melonhatch/config.toml``

Example file::

    author = "Jane Doe"
    editor_command = "rider"
    open_editor = true
    template_dir = "~/mod-templates/melon"
    log_level = "INFO"

``MELONHATCH_AUTHOR`` and ``MELONHATCH_EDITOR`` override the file.

The default author is the current OS user. It is resolved here, once, and
passed down as a plain value so nothing below the CLI reads process state.
"""

from __future__ import annotations

import getpass
import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from melonhatch.exceptions import ConfigError


__all__ = ["CONFIG_ENV_VAR", "WizardSettings", "default_author", "default_config_path", "load_settings"]

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MELONHATCH_CONFIG"
AUTHOR_ENV_VAR = "MELONHATCH_AUTHOR"
EDITOR_ENV_VAR = "MELONHATCH_EDITOR"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_author() -> str:
    """Name of the logged-in user, or ``"Unknown"``."""
    try:
        return getpass.getuser() or "Unknown"
    except (KeyError, OSError):
        return "Unknown"


def default_config_path() -> Path:
    return Path.home() / ".config" / "melonhatch" / "config.toml"


class WizardSettings(BaseModel):
    """
    Defaults for the ``new`` command.

    Attributes
    ----------
    author : str
        Author written into generated mods.

    template_dir : Path | None
        Template tree to use instead of the bundled one.

    editor_command : str
        Executable used to open the generated project.

    open_editor : bool
        Open the project after creating it.

    log_level : str
        Level for the ``melonhatch`` logger when ``--verbose`` is not given.
    """

    author: str = Field(default_factory=default_author)
    template_dir: Path | None = None
    editor_command: str = "code"
    open_editor: bool = False
    log_level: str = "WARNING"

    @field_validator("template_dir")
    @classmethod
    def expand_template_dir(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper().strip()
        if v not in LOG_LEVELS:
            msg = f"Invalid log level '{v}'. Valid: {', '.join(LOG_LEVELS)}"
            raise ValueError(msg)
        return v


def _read_toml(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc


def load_settings(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> WizardSettings:
    """
    Load settings from TOML and the environment.

    Parameters
    ----------
    path : Path | None
        Explicit settings file. It must exist.

    environ : Mapping[str, str] | None
        Environment to read overrides from; defaults to ``os.environ``.

    Returns
    -------
    WizardSettings
        Validated settings. Without any file the defaults are used.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid TOML, or has invalid values.
    """
    env = os.environ if environ is None else environ

    if path is None and env.get(CONFIG_ENV_VAR):
        path = Path(env[CONFIG_ENV_VAR])
    elif path is None and default_config_path().is_file():
        path = default_config_path()

    data: dict = {}
    if path is not None:
        logger.debug("Loading settings from %s", path)
        data = _read_toml(path.expanduser())

    if env.get(AUTHOR_ENV_VAR):
        data["author"] = env[AUTHOR_ENV_VAR]
    if env.get(EDITOR_ENV_VAR):
        data["editor_command"] = env[EDITOR_ENV_VAR]

    try:
        return WizardSettings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
