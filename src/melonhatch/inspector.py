"""
melonhatch.inspector - Game Installation Introspection
======================================================

Given the executable of a Unity game, work out whether MelonLoader is
installed, which scripting backend the game uses, which MelonLoader
version is present, and who made the game.

Layout read
-----------
    <game root>/
    ├── <Game>.exe                           (selected by the user)
    ├── <Game>_Data/
    │   ├── app.info                         (developer, game name)
    │   └── il2cpp_data/Metadata/global-metadata.dat   (IL2CPP only)
    └── MelonLoader/
        ├── net35/MelonLoader.dll            (version probe, Mono)
        └── net6/MelonLoader.dll             (version probe, IL2CPP)

Detection runs exactly once per project creation. The resulting
``GameInfo`` is the only source of truth for the backend and the version
afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

from melonhatch.exceptions import InvalidLayoutError
from melonhatch.fileversion import read_file_version
from melonhatch.models import (
    FRAMEWORK_DIR_NAME,
    UNKNOWN_DEVELOPER,
    UNKNOWN_GAME,
    GameInfo,
    RuntimeBackend,
)
from melonhatch.versioning import Version, parse_version


__all__ = [
    "CORE_ASSEMBLY_NAME",
    "data_path_for",
    "detect_backend",
    "detect_framework_version",
    "inspect_game",
    "read_app_info",
]

logger = logging.getLogger(__name__)

CORE_ASSEMBLY_NAME = "MelonLoader.dll"
APP_INFO_NAME = "app.info"
IL2CPP_METADATA = Path("il2cpp_data") / "Metadata" / "global-metadata.dat"


def data_path_for(exe_path: Path) -> Path:
    """
    Return the Unity data directory belonging to an executable.

    >>> data_path_for(Path("/games/Foo/Foo.exe"))
    PosixPath('/games/Foo/Foo_Data')
    """
    return exe_path.parent / f"{exe_path.stem}_Data"


def detect_backend(data_path: Path) -> RuntimeBackend:
    """IL2CPP iff the global metadata file is present, Mono otherwise."""
    if (data_path / IL2CPP_METADATA).is_file():
        return RuntimeBackend.ALT_RUNTIME
    return RuntimeBackend.STANDARD


def detect_framework_version(framework_path: Path, backend: RuntimeBackend) -> Version:
    """
    Read the MelonLoader version from the backend's core assembly.

    A missing or unreadable assembly yields ``0.0.0``.
    """
    probe = framework_path / backend.framework_subdir / CORE_ASSEMBLY_NAME
    return parse_version(read_file_version(probe))


def read_app_info(data_path: Path) -> tuple[str, str]:
    """
    Read ``(developer, game name)`` from ``app.info``.

    Unity writes the company name on the first line and the product name
    on the second. Blank lines are skipped. If the file is missing or has
    fewer than two non-empty lines, both "Unknown" sentinels are returned.
    """
    app_info = data_path / APP_INFO_NAME
    if not app_info.is_file():
        return UNKNOWN_DEVELOPER, UNKNOWN_GAME

    text = app_info.read_text(encoding="utf-8", errors="replace")
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        logger.debug("%s has fewer than two lines, ignoring it", app_info)
        return UNKNOWN_DEVELOPER, UNKNOWN_GAME

    return lines[0], lines[1]


def inspect_game(exe_path: str | Path) -> GameInfo:
    """
    Inspect a Unity game installation.

    Parameters
    ----------
    exe_path : str | Path
        Path to the game's executable.

    Returns
    -------
    GameInfo
        The detected layout, backend, MelonLoader version and metadata.

    Raises
    ------
    InvalidLayoutError
        If ``<exe stem>_Data`` does not exist next to the executable, or
        if there is no ``MelonLoader`` directory in the game root. The
        data directory is checked first.
    """
    exe = Path(exe_path)
    game_dir = exe.parent
    data_path = data_path_for(exe)
    logger.debug("Inspecting %s (data dir: %s)", exe, data_path)

    if not data_path.is_dir():
        raise InvalidLayoutError("Selected path does not contain a Unity game Data folder.")

    framework_path = game_dir / FRAMEWORK_DIR_NAME
    if not framework_path.is_dir():
        raise InvalidLayoutError("MelonLoader is not installed in the selected game directory.")

    backend = detect_backend(data_path)
    version = detect_framework_version(framework_path, backend)
    developer, name = read_app_info(data_path)

    info = GameInfo(
        path=game_dir,
        data_path=data_path,
        exe_path=exe,
        is_unity_game=True,
        has_framework_installed=True,
        backend=backend,
        framework_version=version,
        game_developer=developer,
        game_name=name,
    )
    logger.info(
        "Detected %s by %s: %s backend, MelonLoader %s",
        info.game_name, info.game_developer, backend.label, version,
    )
    return info
