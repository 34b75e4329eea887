"""
melonhatch.editor - Open a Generated Project in an Editor
=========================================================

The editor is an external program (``code`` by default) that takes a
folder path as its only argument. Failing to launch it never fails the
project creation; the caller only gets ``False`` back.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from pathlib import Path


__all__ = ["open_in_editor"]

logger = logging.getLogger(__name__)


def open_in_editor(project_path: Path, command: str = "code") -> bool:
    """
    Open ``project_path`` with ``command``.

    Parameters
    ----------
    project_path : Path
        Folder to open.

    command : str, default="code"
        Editor command line. Extra arguments are allowed
        (``"code --new-window"``); the path is appended last.

    Returns
    -------
    bool
        True if the editor was started, False if it is not installed or
        could not be launched.
    """
    args = shlex.split(command, posix=os.name != "nt")
    if not args:
        logger.warning("No editor command configured")
        return False

    executable = shutil.which(args[0])
    if executable is None:
        logger.warning("Editor '%s' was not found on PATH", args[0])
        return False

    try:
        subprocess.Popen(
            [executable, *args[1:], str(project_path)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        logger.warning("Failed to open project in %s: %s", args[0], exc)
        return False

    logger.info("Opened %s in %s", project_path, args[0])
    return True
