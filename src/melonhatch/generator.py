"""
melonhatch.generator - Mod Project Generation
=============================================

This module turns an inspected game and a mod configuration into a project
directory on disk.

Architecture
------------
The generator follows a pipeline pattern:

    1. Refuse to overwrite an existing project directory
    2. Resolve the assembly references for the game
    3. Build the placeholder map
    4. Copy the template tree with placeholders filled in
    5. Report placeholder keys that had no value

If anything fails after the project directory was created, the partial
directory is removed and the error is re-raised.

Placeholder Keys
----------------
    GAME_DIR          game root directory
    GAME_DEV          developer from app.info
    GAME_NAME         game name from app.info
    FRAMEWORK_VER     target framework moniker (net6.0 / net35)
    MELON_VERSION     detected MelonLoader version
    AUTHOR            author name
    PROJ_REFERENCES   rendered <Reference> items
    INIT_METHOD_NAME  OnInitializeMelon (0.5.5+) or OnApplicationStart
    IMPLICIT_USINGS   enable (0.5.5+) or disable
    MOD_NAME          mod name
    NAMESPACE         C# namespace

Usage Example
-------------
>>> from melonhatch.generator import create_mod_project
>>> from melonhatch.inspector import inspect_game
>>> from melonhatch.models import ModProjectConfig
>>> info = inspect_game("C:/Games/Foo/Foo.exe")
>>> result = create_mod_project(info, ModProjectConfig(name="FooTweaks"))
>>> result.project_path
WindowsPath('C:/Users/me/FooTweaks')
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from melonhatch.models import GameInfo, ModProjectConfig
from melonhatch.references import render_references, resolve_references
from melonhatch.templater import DEFAULT_NAME_TOKEN, copy_template
from melonhatch.versioning import Version


__all__ = [
    "ScaffoldResult",
    "build_replacements",
    "create_mod_project",
    "default_template_dir",
]

logger = logging.getLogger(__name__)

# Console for rich output
console = Console()

# MelonLoader 0.5.5 renamed OnApplicationStart and started targeting SDKs
# with implicit usings.
INIT_RENAME_VERSION = Version(0, 5, 5)


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class ScaffoldResult:
    """
    Result of a mod project generation.

    Attributes
    ----------
    success : bool
        Whether the project was created.

    project_path : Path
        Project directory.

    files_created : list[Path]
        Every file written.

    references : list[Path]
        Assemblies the project references.

    warnings : list[str]
        Non-fatal problems, such as placeholders without a value.

    errors : list[str]
        Errors (only populated if success=False).
    """

    success: bool
    project_path: Path
    files_created: list[Path] = field(default_factory=list)
    references: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# =============================================================================
# Replacement Map
# =============================================================================

def default_template_dir() -> Path:
    """The mod template shipped inside the package."""
    return Path(__file__).parent / "templates" / "mod"


def build_replacements(
    info: GameInfo,
    config: ModProjectConfig,
    references: list[Path] | None = None,
) -> dict[str, str]:
    """
    Build the ``$KEY$`` map for a mod project.

    Parameters
    ----------
    info : GameInfo
        Inspected game.

    config : ModProjectConfig
        Mod name, author and namespace.

    references : list[Path] | None
        Pre-resolved references; resolved from ``info`` when omitted.

    Returns
    -------
    dict[str, str]
        Placeholder name to value. See the module docstring for the keys.
    """
    if references is None:
        references = resolve_references(info)

    renamed_init = info.framework_version >= INIT_RENAME_VERSION

    return {
        "GAME_DIR": str(info.path),
        "GAME_DEV": info.game_developer,
        "GAME_NAME": info.game_name,
        "FRAMEWORK_VER": info.backend.target_framework,
        "MELON_VERSION": str(info.framework_version),
        "AUTHOR": config.author,
        "PROJ_REFERENCES": render_references(references),
        "INIT_METHOD_NAME": "OnInitializeMelon" if renamed_init else "OnApplicationStart",
        "IMPLICIT_USINGS": "enable" if renamed_init else "disable",
        "MOD_NAME": config.name,
        "NAMESPACE": config.effective_namespace,
    }


# =============================================================================
# Main Generation Function
# =============================================================================

def create_mod_project(
    info: GameInfo,
    config: ModProjectConfig,
    *,
    template_dir: Path | None = None,
    strict: bool = False,
    verbose: bool = True,
) -> ScaffoldResult:
    """
    Create a mod project for ``info`` from a template.

    Parameters
    ----------
    info : GameInfo
        Inspected game.

    config : ModProjectConfig
        What to create and where.

    template_dir : Path | None
        Template tree; defaults to the bundled template.

    strict : bool, default=False
        Fail on template placeholders without a value instead of
        rendering them empty.

    verbose : bool, default=True
        Print progress to the console.

    Returns
    -------
    ScaffoldResult
        Result object containing success status and details.

    Raises
    ------
    FileExistsError
        If the project directory already exists.
    PlaceholderMissing
        In strict mode, when the template uses an unknown key.
    """
    project_dir = config.project_dir
    template = template_dir or default_template_dir()
    result = ScaffoldResult(success=False, project_path=project_dir)

    if project_dir.exists():
        msg = (
            f"Directory '{project_dir}' already exists. "
            "Use a different name or remove the existing directory."
        )
        result.errors.append(msg)
        raise FileExistsError(msg)

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold blue]Creating mod:[/] [green]{config.name}[/]\n"
                f"[dim]Game: {info.game_name} | "
                f"Backend: {info.backend.label} | "
                f"MelonLoader: {info.framework_version}[/]",
                title="[bold]melonhatch[/]",
                border_style="blue",
            )
        )

    try:
        result.references = resolve_references(info)
        if verbose:
            console.print(f"[bold]Resolved {len(result.references)} references[/]")

        replacements = build_replacements(info, config, result.references)
        outcome = copy_template(
            template,
            project_dir,
            replacements,
            name=config.name,
            token=DEFAULT_NAME_TOKEN,
            strict=strict,
        )
        result.files_created.extend(outcome.files_created)
        result.warnings.extend(
            f'Replacement for key "{key}" not found.' for key in outcome.missing_keys
        )

        if verbose:
            for path in outcome.files_created:
                console.print(f"  Created {path.relative_to(config.output_dir)}")
            for warning in result.warnings:
                console.print(f"  [yellow]⚠[/] {warning}")

    except Exception as e:
        result.errors.append(str(e))
        if project_dir.exists():
            shutil.rmtree(project_dir)
            logger.info("Removed partial project directory %s", project_dir)
        raise

    result.success = True
    logger.info("Created %s with %d files", project_dir, len(result.files_created))

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold green]Project created successfully![/]\n\n"
                f"[dim]Location:[/] {project_dir}",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return result
