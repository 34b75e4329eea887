"""
melonhatch - MelonLoader Mod Project Wizard
===========================================

A CLI tool that creates C# mod projects for Unity games running
MelonLoader. It inspects the game installation, works out the MelonLoader
version and the scripting backend (Mono or IL2CPP), and generates a
project that references exactly the assemblies present on disk.

Quick Start
-----------
```bash
# Install melonhatch
pip install melonhatch

# Walk through the wizard
melonhatch new

# Or script it
melonhatch new "C:/Games/Foo/Foo.exe" --name FooTweaks --output ./mods --yes
```

Example
-------
>>> from melonhatch import inspect_game, resolve_references
>>> info = inspect_game("C:/Games/Foo/Foo.exe")
>>> info.backend, str(info.framework_version)
(<RuntimeBackend.ALT_RUNTIME: 'il2cpp'>, '0.6.1')
>>> len(resolve_references(info))
187

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface
- ``inspector``: Game installation introspection
- ``references``: Version- and backend-dependent reference resolution
- ``versioning``: Dotted version parsing and comparison
- ``fileversion``: PE file version reader
- ``generator``: Mod project generation pipeline
- ``templater``: Template tree copy with ``$KEY$`` substitution
- ``models``: Pydantic models for game layouts and projects
- ``config``: User settings

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================
# These are the main functions/classes users should interact with when using
# melonhatch as a library (as opposed to the CLI)

from melonhatch.exceptions import InvalidLayoutError, MelonHatchError
from melonhatch.generator import create_mod_project
from melonhatch.inspector import inspect_game
from melonhatch.models import GameInfo, ModProjectConfig, RuntimeBackend
from melonhatch.references import resolve_references
from melonhatch.versioning import Version, compare_versions, parse_version


__all__ = [
    # Data models
    "GameInfo",
    # Errors
    "InvalidLayoutError",
    "MelonHatchError",
    "ModProjectConfig",
    "RuntimeBackend",
    "Version",
    # Version info
    "__version__",
    "compare_versions",
    # Core functions
    "create_mod_project",
    "inspect_game",
    "parse_version",
    "resolve_references",
]
