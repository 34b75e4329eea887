"""
melonhatch.cli - Command Line Interface
=======================================

This module provides the command-line interface for melonhatch using Typer.
Values that are not passed as arguments are asked for with questionary
prompts, so running ``melonhatch new`` with no arguments walks through the
whole wizard.

Architecture
------------
    app (main entry point)
    ├── new         - Create a new mod project
    ├── inspect     - Show what melonhatch detects for a game
    └── references  - List the assemblies a project would reference

Errors from the core (invalid game layout, dismissed prompts, existing
project directory) are all handled in one place, ``_fail``, which prints
the message and exits with status 1.

Usage Examples
--------------
Interactive mode:
    $ melonhatch new

Non-interactive mode:
    $ melonhatch new "C:/Games/Foo/Foo.exe" --name FooTweaks --output ~/mods --yes

Inspect a game:
    $ melonhatch inspect "C:/Games/Foo/Foo.exe"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, NoReturn

import questionary
import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from melonhatch import __version__
from melonhatch.config import WizardSettings, load_settings
from melonhatch.editor import open_in_editor
from melonhatch.exceptions import MelonHatchError, UserCancelled
from melonhatch.generator import create_mod_project
from melonhatch.inspector import inspect_game
from melonhatch.logging_setup import setup_logging
from melonhatch.models import MOD_NAME_PATTERN, ModProjectConfig
from melonhatch.references import managed_assemblies_dir, render_references, resolve_references


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="melonhatch",
    help="Scaffold MelonLoader mod projects for Unity games.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Console for rich output
console = Console()


def _fail(error: Exception, action: str = "project creation") -> NoReturn:
    """Report an error to the user and exit with status 1."""
    rprint(f"[red]Error during {action}:[/] {escape(str(error))}")
    raise typer.Exit(1)


def _settings(ctx: typer.Context) -> WizardSettings:
    if isinstance(ctx.obj, WizardSettings):
        return ctx.obj
    return WizardSettings()


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]melonhatch[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]MelonLoader mod project wizard[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def _validate_mod_name(value: str) -> bool | str:
    if not MOD_NAME_PATTERN.match(value.strip()):
        return "Invalid name. Use only letters, numbers, and underscores."
    return True


def prompt_exe_path() -> Path:
    """
    Ask for the game executable.

    Raises
    ------
    UserCancelled
        If the prompt is dismissed.
    """
    result = questionary.path(
        "Select the game executable:",
        validate=lambda p: Path(p).is_file() or "Select an existing file.",
    ).ask()

    if not result:
        raise UserCancelled("No executable file selected.")

    return Path(result).expanduser()


def prompt_mod_name() -> str:
    """Ask for the mod name, validated as a C# identifier."""
    result = questionary.text(
        "Enter the name of your mod (e.g., MyAwesomeMod):",
        validate=_validate_mod_name,
    ).ask()

    if not result:
        raise UserCancelled("Mod name is required.")

    return result.strip()


def prompt_output_dir() -> Path:
    """Ask where the project directory should be created."""
    result = questionary.path(
        "Select project location:",
        default=str(Path.cwd()),
        only_directories=True,
    ).ask()

    if not result:
        raise UserCancelled("No project location selected.")

    return Path(result).expanduser()


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging.",
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (TOML).",
        ),
    ] = None,
) -> None:
    """
    [bold]melonhatch[/] - MelonLoader mod project wizard.

    Point it at a Unity game with MelonLoader installed and it creates a
    C# project that references the right MelonLoader and game assemblies.

    [bold]Quick Start:[/]

        melonhatch new
    """
    try:
        settings = load_settings(config)
    except MelonHatchError as e:
        setup_logging(logging.DEBUG if verbose else logging.WARNING)
        _fail(e, "startup")

    setup_logging(logging.DEBUG if verbose else settings.log_level)
    ctx.obj = settings


# =============================================================================
# New Command - Create a New Mod Project
# =============================================================================

@app.command()
def new(
    ctx: typer.Context,
    exe: Annotated[
        Path | None,
        typer.Argument(
            help="Game executable (prompted for if omitted)",
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Mod name, e.g. MyAwesomeMod",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the project in",
        ),
    ] = None,
    author: Annotated[
        str | None,
        typer.Option(
            "--author",
            "-a",
            help="Author name (default: from settings, else the current user)",
        ),
    ] = None,
    template: Annotated[
        Path | None,
        typer.Option(
            "--template",
            help="Template directory to use instead of the bundled one",
        ),
    ] = None,
    open_editor: Annotated[
        bool | None,
        typer.Option(
            "--open/--no-open",
            help="Open the project in the configured editor",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail on template placeholders without a value",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Never prompt; missing values are an error",
        ),
    ] = False,
) -> None:
    """
    Create a new MelonLoader mod project.

    [bold]Examples:[/]

        # Fully interactive
        melonhatch new

        # Scripted
        melonhatch new Game.exe --name MyMod --output ./mods --yes
    """
    settings = _settings(ctx)

    try:
        if exe is None:
            if yes:
                raise UserCancelled("No executable file selected.")
            exe = prompt_exe_path()

        info = inspect_game(exe)

        if name is None:
            if yes:
                raise UserCancelled("Mod name is required.")
            name = prompt_mod_name()

        if output_dir is None:
            if yes:
                raise UserCancelled("No project location selected.")
            output_dir = prompt_output_dir()

        config = ModProjectConfig(
            name=name,
            output_dir=output_dir,
            author=author or settings.author,
        )

        result = create_mod_project(
            info,
            config,
            template_dir=template or settings.template_dir,
            strict=strict,
        )
    except (MelonHatchError, OSError, ValueError) as e:
        _fail(e)

    should_open = settings.open_editor if open_editor is None else open_editor
    if should_open and not open_in_editor(result.project_path, settings.editor_command):
        rprint(f"[yellow]Warning:[/] Could not open the project with '{settings.editor_command}'.")


# =============================================================================
# Inspect Command
# =============================================================================

@app.command()
def inspect(
    exe: Annotated[
        Path,
        typer.Argument(help="Game executable"),
    ],
) -> None:
    """
    Show what melonhatch detects for a game installation.
    """
    try:
        info = inspect_game(exe)
    except MelonHatchError as e:
        _fail(e, "inspection")

    table = Table(title="Game Installation", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Game", info.game_name)
    table.add_row("Developer", info.game_developer)
    table.add_row("Game directory", str(info.path))
    table.add_row("Data directory", str(info.data_path))
    table.add_row("Backend", info.backend.label)
    table.add_row("Target framework", info.backend.target_framework)
    table.add_row("MelonLoader", str(info.framework_version))
    table.add_row("Managed assemblies", str(managed_assemblies_dir(info)))

    console.print(table)


# =============================================================================
# References Command
# =============================================================================

@app.command()
def references(
    exe: Annotated[
        Path,
        typer.Argument(help="Game executable"),
    ],
    xml: Annotated[
        bool,
        typer.Option(
            "--xml",
            help="Print the MSBuild <Reference> items instead of paths",
        ),
    ] = False,
) -> None:
    """
    List the assemblies a new project for this game would reference.
    """
    try:
        info = inspect_game(exe)
    except MelonHatchError as e:
        _fail(e, "inspection")

    resolved = resolve_references(info)

    if xml:
        typer.echo(render_references(resolved))
        return

    for path in resolved:
        typer.echo(str(path))


if __name__ == "__main__":
    app()
