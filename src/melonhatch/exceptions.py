"""
melonhatch.exceptions - Error Taxonomy
======================================

Every error melonhatch raises on purpose derives from ``MelonHatchError``.
Core modules raise at the point of detection and never catch their own
errors; the CLI is the single place where errors are turned into
user-facing messages.

Hierarchy
---------
    MelonHatchError
    ├── InvalidLayoutError   - not a modded Unity game (fatal)
    ├── VersionReadError     - version metadata unreadable (recovered)
    ├── UserCancelled        - a prompt was dismissed
    ├── PlaceholderMissing   - unknown template key (strict mode only)
    └── ConfigError          - settings file could not be loaded
"""

from __future__ import annotations


__all__ = [
    "ConfigError",
    "InvalidLayoutError",
    "MelonHatchError",
    "PlaceholderMissing",
    "UserCancelled",
    "VersionReadError",
]


class MelonHatchError(Exception):
    """Root exception for all melonhatch errors."""


class InvalidLayoutError(MelonHatchError):
    """
    The selected executable is not a Unity game with MelonLoader installed.

    Raised by ``inspect_game`` when the ``<exe>_Data`` directory or the
    ``MelonLoader`` directory is missing. The message is shown to the user
    verbatim.
    """


class VersionReadError(MelonHatchError):
    """Raised inside the file version reader; always recovered to ``0.0.0``."""


class UserCancelled(MelonHatchError):
    """Raised when the user dismisses a selection or input prompt."""


class PlaceholderMissing(MelonHatchError):
    """
    A template referenced a ``$KEY$`` with no replacement value.

    Only raised when substitution runs in strict mode. In the default mode
    the key renders as an empty string and a warning is recorded instead.

    Attributes
    ----------
    key : str
        The placeholder name without the surrounding ``$`` signs.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Replacement for key "{key}" not found.')


class ConfigError(MelonHatchError):
    """Raised when a settings file exists but cannot be parsed or validated."""
