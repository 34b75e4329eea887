"""
melonhatch.models - Pydantic Models for Game Layouts and Mod Projects
=====================================================================

This module defines the data passed between the inspector, the reference
resolver and the project generator.

Architecture Notes
------------------
    GameInfo (what we found on disk)
    ├── RuntimeBackend (enum: mono / il2cpp)
    └── Version (major.minor.patch of MelonLoader)

    ModProjectConfig (what the user asked for)
    ├── name
    ├── output_dir
    ├── author
    └── namespace

``GameInfo`` is built once per run by ``inspect_game`` and is read-only
afterwards. Everything downstream keys off ``backend`` and
``framework_version``; nothing re-detects them.

Usage Example
-------------
>>> from melonhatch.models import ModProjectConfig
>>> config = ModProjectConfig(name="MyAwesomeMod", output_dir=Path("/tmp"))
>>> config.project_dir
PosixPath('/tmp/MyAwesomeMod')
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from melonhatch.versioning import ZERO_VERSION, Version, parse_version


# =============================================================================
# Constants
# =============================================================================

FRAMEWORK_DIR_NAME = "MelonLoader"
UNKNOWN_DEVELOPER = "Unknown Developer"
UNKNOWN_GAME = "Unknown Game"

MOD_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

V6 = Version(0, 6, 0)


# =============================================================================
# Enumerations
# =============================================================================

class RuntimeBackend(str, Enum):
    """
    Scripting backend the game was built with.

    Unity ships managed code either on Mono (JIT, the original assemblies
    are on disk) or on IL2CPP (ahead-of-time compiled; MelonLoader
    generates proxy assemblies for mods to compile against).

    Attributes
    ----------
    STANDARD : str
        Mono backend. MelonLoader's ``net35`` build is used.

    ALT_RUNTIME : str
        IL2CPP backend, detected by ``il2cpp_data/Metadata/global-metadata.dat``.
        MelonLoader's ``net6`` build is used.

    Examples
    --------
    >>> RuntimeBackend.ALT_RUNTIME.framework_subdir
    'net6'
    >>> RuntimeBackend.STANDARD.target_framework
    'net35'
    """

    STANDARD = "mono"
    ALT_RUNTIME = "il2cpp"

    @property
    def is_alt_runtime(self) -> bool:
        return self is RuntimeBackend.ALT_RUNTIME

    @property
    def framework_subdir(self) -> str:
        """Name of the MelonLoader subdirectory built for this backend."""
        subdirs = {
            RuntimeBackend.STANDARD: "net35",
            RuntimeBackend.ALT_RUNTIME: "net6",
        }
        return subdirs[self]

    @property
    def target_framework(self) -> str:
        """
        MSBuild ``TargetFramework`` moniker for a mod on this backend.

        Returns
        -------
        str
            ``net6.0`` for IL2CPP games, ``net35`` for Mono games.
        """
        monikers = {
            RuntimeBackend.STANDARD: "net35",
            RuntimeBackend.ALT_RUNTIME: "net6.0",
        }
        return monikers[self]

    @property
    def label(self) -> str:
        labels = {
            RuntimeBackend.STANDARD: "Mono",
            RuntimeBackend.ALT_RUNTIME: "IL2CPP",
        }
        return labels[self]


# =============================================================================
# Game Layout
# =============================================================================

class GameInfo(BaseModel):
    """
    Everything melonhatch learned about a game installation.

    Attributes
    ----------
    path : Path
        Game root directory (the executable's parent).

    data_path : Path
        Unity data directory, ``<exe stem>_Data``.

    exe_path : Path
        The executable the user selected.

    is_unity_game : bool
        True iff ``data_path`` exists.

    has_framework_installed : bool
        True iff ``<path>/MelonLoader`` exists.

    backend : RuntimeBackend
        Mono or IL2CPP.

    framework_version : Version
        MelonLoader version; ``0.0.0`` when it could not be read.

    game_developer, game_name : str
        From ``app.info``; "Unknown ..." sentinels otherwise.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    data_path: Path
    exe_path: Path
    is_unity_game: bool = True
    has_framework_installed: bool = True
    backend: RuntimeBackend = RuntimeBackend.STANDARD
    framework_version: Version = Field(default=ZERO_VERSION)
    game_developer: str = UNKNOWN_DEVELOPER
    game_name: str = UNKNOWN_GAME

    @field_validator("framework_version", mode="before")
    @classmethod
    def coerce_version(cls, v: object) -> object:
        """Accept ``"0.6.1"`` style strings as well as ``Version`` objects."""
        if v is None or isinstance(v, str):
            return parse_version(v)
        return v

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_alt_runtime(self) -> bool:
        return self.backend.is_alt_runtime

    @property
    def is_framework_v6_plus(self) -> bool:
        """True for MelonLoader 0.6.0 and later, where the file layout changed."""
        return self.framework_version >= V6

    @property
    def framework_path(self) -> Path:
        return self.path / FRAMEWORK_DIR_NAME


# =============================================================================
# Mod Project Configuration
# =============================================================================

class ModProjectConfig(BaseModel):
    """
    What the user asked melonhatch to create.

    Attributes
    ----------
    name : str
        Mod name. Used as the project directory name, the assembly name
        and (by default) the C# namespace, so it must be a valid C#
        identifier: a letter or underscore followed by letters, digits
        and underscores.

    output_dir : Path
        Directory the project directory is created in.

    author : str
        Author name written into the mod's ``MelonInfo`` attribute.

    namespace : str | None
        C# namespace; defaults to ``name``.

    Examples
    --------
    >>> ModProjectConfig(name="MyMod").effective_namespace
    'MyMod'
    """

    name: Annotated[str, Field(
        description="Mod name (a C# identifier)",
        min_length=1,
        max_length=100,
    )]
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory where the project will be created",
    )
    author: str = Field(
        default="Unknown",
        description="Author name",
    )
    namespace: str | None = Field(
        default=None,
        description="C# namespace (defaults to the mod name)",
    )

    @field_validator("name")
    @classmethod
    def validate_mod_name(cls, v: str) -> str:
        """
        Check that the mod name is a valid identifier.

        Unlike Python package names, C# identifiers are case sensitive, so
        the name is only stripped, never lowercased.
        """
        v = v.strip()
        if not MOD_NAME_PATTERN.match(v):
            msg = (
                f"Invalid name '{v}'. Use only letters, numbers, and underscores, "
                "and do not start with a number."
            )
            raise ValueError(msg)
        return v

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not all(MOD_NAME_PATTERN.match(part) for part in v.split(".")):
            msg = f"Invalid namespace '{v}'."
            raise ValueError(msg)
        return v

    @property
    def project_dir(self) -> Path:
        """output_dir / name"""
        return self.output_dir / self.name

    @property
    def effective_namespace(self) -> str:
        return self.namespace or self.name
