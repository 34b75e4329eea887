"""
melonhatch.references - Project Reference Resolution
====================================================

Works out which assemblies a generated mod project has to reference so it
compiles against the game's MelonLoader installation.

MelonLoader moved its files around between releases, so the set depends
on both the version and the scripting backend:

    version <= 0.5.3   MelonLoader/MelonLoader.dll
    version <= 0.5.7   MelonLoader/MelonLoader.dll
                       MelonLoader/0Harmony.dll
    otherwise          MelonLoader/<net35|net6>/MelonLoader.dll
                       MelonLoader/<net35|net6>/0Harmony.dll
                       + MelonLoader/net6/Il2CppInterop.{Runtime,Common}.dll (IL2CPP)

Mono games additionally need ``ValueTupleBridge.dll`` (next to
MelonLoader.dll before 0.6, in ``net35/`` from 0.6 on).

After the framework files come the game's own managed assemblies. Those
are read from ``<Game>_Data/Managed`` on Mono, and from the proxy
assemblies MelonLoader generates on IL2CPP (``MelonLoader/Il2CppAssemblies``
from 0.6, ``MelonLoader/Managed`` before). Platform assemblies that the
target framework already provides are skipped.

Candidates that do not exist on disk are dropped silently: an optional
library that is absent is not an error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, PackageLoader

from melonhatch.models import GameInfo, RuntimeBackend
from melonhatch.versioning import Version


__all__ = [
    "BLACKLISTED_REFERENCES",
    "framework_references",
    "is_blacklisted_reference",
    "managed_assemblies_dir",
    "managed_references",
    "render_references",
    "resolve_references",
]

logger = logging.getLogger(__name__)

CORE_DLL = "MelonLoader.dll"
HARMONY_DLL = "0Harmony.dll"
VALUE_TUPLE_BRIDGE_DLL = "ValueTupleBridge.dll"
IL2CPP_INTEROP_DLLS = ("Il2CppInterop.Runtime.dll", "Il2CppInterop.Common.dll")

LAST_COMBINED_CORE = Version(0, 5, 3)
LAST_ROOT_LAYOUT = Version(0, 5, 7)

# Supplied by the target framework; referencing them again breaks the build.
BLACKLISTED_REFERENCES = frozenset({"mscorlib.dll", "netstandard.dll", "Mono.Security.dll"})
BLACKLISTED_PREFIX = "System"

LIBRARY_SUFFIX = ".dll"


# =============================================================================
# Framework Files
# =============================================================================

def _framework_candidates(info: GameInfo) -> list[Path]:
    base = info.framework_path
    version = info.framework_version
    candidates: list[Path] = []

    if version <= LAST_COMBINED_CORE:
        candidates.append(base / CORE_DLL)
    elif version <= LAST_ROOT_LAYOUT:
        candidates += [base / CORE_DLL, base / HARMONY_DLL]
    else:
        subdir = base / info.backend.framework_subdir
        candidates += [subdir / CORE_DLL, subdir / HARMONY_DLL]
        if info.backend is RuntimeBackend.ALT_RUNTIME:
            interop_dir = base / RuntimeBackend.ALT_RUNTIME.framework_subdir
            candidates += [interop_dir / name for name in IL2CPP_INTEROP_DLLS]

    if info.backend is RuntimeBackend.STANDARD:
        bridge_dir = base / RuntimeBackend.STANDARD.framework_subdir if info.is_framework_v6_plus else base
        candidates.append(bridge_dir / VALUE_TUPLE_BRIDGE_DLL)

    return candidates


def framework_references(info: GameInfo) -> list[Path]:
    """
    MelonLoader's own assemblies for this version and backend.

    Returns
    -------
    list[Path]
        Core tier first, then the Mono-only bridge, existing files only.
    """
    existing: list[Path] = []
    for candidate in _framework_candidates(info):
        if candidate.is_file():
            existing.append(candidate)
        else:
            logger.debug("Skipping missing framework reference %s", candidate)
    return existing


# =============================================================================
# Managed Assembly Sweep
# =============================================================================

def is_blacklisted_reference(file_name: str) -> bool:
    """
    True for assemblies the target framework already provides.

    >>> is_blacklisted_reference("System.Core.dll")
    True
    >>> is_blacklisted_reference("Assembly-CSharp.dll")
    False
    """
    return file_name in BLACKLISTED_REFERENCES or file_name.startswith(BLACKLISTED_PREFIX)


def managed_assemblies_dir(info: GameInfo) -> Path:
    """Directory holding the assemblies a mod compiles against."""
    if info.backend is RuntimeBackend.ALT_RUNTIME:
        if info.is_framework_v6_plus:
            return info.framework_path / "Il2CppAssemblies"
        return info.framework_path / "Managed"
    return info.data_path / "Managed"


def managed_references(directory: Path) -> list[Path]:
    """
    Every non-blacklisted ``.dll`` in ``directory``, sorted by name.

    A missing directory yields an empty list.
    """
    if not directory.is_dir():
        logger.warning("Managed assembly directory %s does not exist", directory)
        return []

    return sorted(
        (
            entry for entry in directory.iterdir()
            if entry.is_file()
            and entry.name.endswith(LIBRARY_SUFFIX)
            and not is_blacklisted_reference(entry.name)
        ),
        key=lambda entry: entry.name,
    )


# =============================================================================
# Resolution
# =============================================================================

def resolve_references(info: GameInfo) -> list[Path]:
    """
    All assemblies a generated project for ``info`` must reference.

    Parameters
    ----------
    info : GameInfo
        Inspected game layout.

    Returns
    -------
    list[Path]
        Framework files, then the Mono bridge, then the managed-assembly
        sweep. Every path exists; the order is deterministic for a given
        filesystem state.
    """
    references = framework_references(info)
    references += managed_references(managed_assemblies_dir(info))
    logger.debug("Resolved %d references", len(references))
    return references


# =============================================================================
# MSBuild Rendering
# =============================================================================

def create_jinja_env() -> Environment:
    """Jinja2 environment over the bundled ``melonhatch/templates`` package."""
    return Environment(
        loader=PackageLoader("melonhatch", "templates"),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_references(references: list[Path]) -> str:
    """
    Render ``<Reference>`` items for a ``.csproj`` ``ItemGroup``.

    Each assembly becomes::

        <Reference Include="Assembly-CSharp">
            <HintPath>C:\\Games\\Foo\\Foo_Data\\Managed\\Assembly-CSharp.dll</HintPath>
        </Reference>

    indented with tabs to sit two levels deep in the project file.
    """
    template = create_jinja_env().get_template("references.xml.j2")
    return template.render(references=references).rstrip("\n")
