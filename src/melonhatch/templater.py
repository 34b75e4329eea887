"""
melonhatch.templater - Template Tree Copy with Placeholder Substitution
=======================================================================

Project templates are plain directory trees. Text files may contain
placeholders of the form ``$IDENTIFIER$``; file and directory names may
contain a sentinel token (``MyMod``) that is replaced with the mod name.

The copy happens in two steps:

    1. ``plan_template`` reads the template and returns the list of files
       to create, already renamed and substituted. Nothing is written.
    2. ``write_plan`` writes that list below the project directory.

Placeholder Protocol
--------------------
Substitution is a literal find/replace of ``$KEY$`` against a mapping. A
key that is not in the mapping renders as the empty string and is
reported (logged and returned to the caller). In strict mode it raises
``PlaceholderMissing`` instead.

Files that are not valid UTF-8 (icons, pre-built libraries) are copied
byte for byte and never substituted.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from melonhatch.exceptions import PlaceholderMissing


__all__ = [
    "DEFAULT_NAME_TOKEN",
    "PlannedFile",
    "TemplateOutcome",
    "copy_template",
    "plan_template",
    "rename_path",
    "replace_placeholders",
    "write_plan",
]

logger = logging.getLogger(__name__)

DEFAULT_NAME_TOKEN = "MyMod"
PLACEHOLDER_PATTERN = re.compile(r"\$(\w+)\$")


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass(frozen=True)
class PlannedFile:
    """
    One file of a planned template copy.

    Attributes
    ----------
    relative_path : PurePath
        Destination path relative to the project directory, after renaming.

    content : str | bytes
        Substituted text, or raw bytes for binary files.
    """

    relative_path: PurePath
    content: str | bytes


@dataclass
class TemplateOutcome:
    """Files written by ``copy_template`` and the placeholder keys it could not fill."""

    files_created: list[Path] = field(default_factory=list)
    missing_keys: list[str] = field(default_factory=list)


# =============================================================================
# Substitution
# =============================================================================

def replace_placeholders(
    content: str,
    replacements: Mapping[str, str],
    *,
    strict: bool = False,
) -> tuple[str, list[str]]:
    """
    Replace every ``$KEY$`` in ``content``.

    Parameters
    ----------
    content : str
        Template text.

    replacements : Mapping[str, str]
        Placeholder name to value.

    strict : bool, default=False
        Raise instead of rendering unknown keys as ``""``.

    Returns
    -------
    tuple[str, list[str]]
        The substituted text and the unknown keys, in order of first
        appearance.

    Raises
    ------
    PlaceholderMissing
        In strict mode, for the first unknown key.

    Examples
    --------
    >>> replace_placeholders("Hello $NAME$$BANG$", {"NAME": "World"})
    ('Hello World', ['BANG'])
    """
    missing: list[str] = []

    def substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in replacements:
            return replacements[key]
        if strict:
            raise PlaceholderMissing(key)
        if key not in missing:
            logger.warning('Replacement for key "%s" not found.', key)
            missing.append(key)
        return ""

    return PLACEHOLDER_PATTERN.sub(substitute, content), missing


def rename_path(relative_path: PurePath, token: str, name: str) -> PurePath:
    """
    Replace ``token`` with ``name`` in every component of ``relative_path``.

    >>> rename_path(PurePath("MyMod/MyMod.csproj"), "MyMod", "Zoom")
    PurePosixPath('Zoom/Zoom.csproj')
    """
    return PurePath(*(part.replace(token, name) for part in relative_path.parts))


# =============================================================================
# Planning and Writing
# =============================================================================

def plan_template(
    template_dir: Path,
    replacements: Mapping[str, str],
    *,
    name: str,
    token: str = DEFAULT_NAME_TOKEN,
    strict: bool = False,
) -> tuple[list[PlannedFile], list[str]]:
    """
    Compute the files a template copy would create.

    The template tree is walked in sorted order so plans are
    deterministic. Directories only appear implicitly through the paths
    of the files inside them.

    Returns
    -------
    tuple[list[PlannedFile], list[str]]
        The planned files and the placeholder keys no replacement was
        found for (each reported once).

    Raises
    ------
    NotADirectoryError
        If ``template_dir`` is not a directory.
    PlaceholderMissing
        In strict mode.
    """
    if not template_dir.is_dir():
        raise NotADirectoryError(f"Template directory not found: {template_dir}")

    plan: list[PlannedFile] = []
    missing: list[str] = []

    for source in sorted(p for p in template_dir.rglob("*") if p.is_file()):
        destination = rename_path(source.relative_to(template_dir), token, name)
        raw = source.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Copying binary template file %s verbatim", source)
            plan.append(PlannedFile(destination, raw))
            continue

        content, file_missing = replace_placeholders(text, replacements, strict=strict)
        missing += [key for key in file_missing if key not in missing]
        plan.append(PlannedFile(destination, content))

    return plan, missing


def write_plan(plan: list[PlannedFile], project_dir: Path) -> list[Path]:
    """Write planned files below ``project_dir`` and return their paths."""
    created: list[Path] = []
    for planned in plan:
        target = project_dir / planned.relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(planned.content, bytes):
            target.write_bytes(planned.content)
        else:
            # newline="" keeps the template's own line endings
            with target.open("w", encoding="utf-8", newline="") as handle:
                handle.write(planned.content)
        created.append(target)
        logger.debug("Wrote %s", target)
    return created


def copy_template(
    template_dir: Path,
    project_dir: Path,
    replacements: Mapping[str, str],
    *,
    name: str,
    token: str = DEFAULT_NAME_TOKEN,
    strict: bool = False,
) -> TemplateOutcome:
    """
    Copy ``template_dir`` to ``project_dir`` with placeholders filled in.

    Parameters
    ----------
    template_dir : Path
        Root of the template tree.

    project_dir : Path
        Destination directory; created if needed.

    replacements : Mapping[str, str]
        ``$KEY$`` values.

    name : str
        Replaces ``token`` in file and directory names.

    token : str, default="MyMod"
        Sentinel in template file names.

    strict : bool, default=False
        Raise ``PlaceholderMissing`` on unknown keys. The check happens
        while planning, so nothing is written in that case.

    Returns
    -------
    TemplateOutcome
        Created files and unfilled placeholder keys.
    """
    plan, missing = plan_template(
        template_dir, replacements, name=name, token=token, strict=strict,
    )
    project_dir.mkdir(parents=True, exist_ok=True)
    created = write_plan(plan, project_dir)
    return TemplateOutcome(files_created=created, missing_keys=missing)
