"""
melonhatch.fileversion - Windows File Version Reader
====================================================

Reads the file version embedded in a Windows PE image (``.dll``/``.exe``)
without calling into the OS, so version detection behaves the same on
every platform melonhatch runs on.

The version lives in the ``VS_FIXEDFILEINFO`` structure of the image's
version resource. The structure starts with the signature ``0xFEEF04BD``
and is followed by ``dwStrucVersion`` and then two DWORDs holding the file
version as ``(major << 16 | minor, build << 16 | revision)``.

Only ``read_file_version`` is meant to be used by the rest of the package.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path

from melonhatch.exceptions import VersionReadError


__all__ = ["UNKNOWN_FILE_VERSION", "read_file_version"]

logger = logging.getLogger(__name__)

UNKNOWN_FILE_VERSION = "0.0.0"

_DOS_MAGIC = b"MZ"
_PE_SIGNATURE = b"PE\x00\x00"
_FIXED_FILE_INFO_SIGNATURE = struct.pack("<I", 0xFEEF04BD)


def _read_fixed_file_version(path: Path) -> str:
    """
    Return ``"major.minor.build.revision"`` for a PE image.

    Raises
    ------
    VersionReadError
        If the file is missing, unreadable, not a PE image, or has no
        ``VS_FIXEDFILEINFO`` block.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise VersionReadError(f"Cannot read {path}: {exc}") from exc

    if not data.startswith(_DOS_MAGIC):
        raise VersionReadError(f"{path} is not a PE image")

    try:
        pe_offset = struct.unpack_from("<I", data, 0x3C)[0]
        if data[pe_offset:pe_offset + 4] != _PE_SIGNATURE:
            raise VersionReadError(f"{path} has no PE signature")

        idx = data.find(_FIXED_FILE_INFO_SIGNATURE, pe_offset)
        if idx == -1:
            raise VersionReadError(f"{path} carries no version resource")

        ms, ls = struct.unpack_from("<II", data, idx + 8)
    except struct.error as exc:
        raise VersionReadError(f"{path} is truncated: {exc}") from exc

    major = (ms >> 16) & 0xFFFF
    minor = ms & 0xFFFF
    build = (ls >> 16) & 0xFFFF
    revision = ls & 0xFFFF
    return f"{major}.{minor}.{build}.{revision}"


def read_file_version(path: str | Path) -> str:
    """
    Read the embedded file version of a PE image.

    Parameters
    ----------
    path : str | Path
        Path to the ``.dll`` or ``.exe``.

    Returns
    -------
    str
        The version as ``"major.minor.build.revision"``, or ``"0.0.0"``
        when the file is missing or carries no version metadata. Failures
        are logged, never raised.
    """
    file_path = Path(path)
    try:
        version = _read_fixed_file_version(file_path)
    except VersionReadError as exc:
        logger.warning("Could not read file version: %s", exc)
        return UNKNOWN_FILE_VERSION

    logger.debug("File version of %s is %s", file_path, version)
    return version
