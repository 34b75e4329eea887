"""
melonhatch.versioning - Dotted Version Parsing and Comparison
=============================================================

MelonLoader reports its version through the Windows file version of
``MelonLoader.dll`` (``0.6.1.0`` and similar). Everything melonhatch
decides based on that version goes through the ``Version`` triple defined
here, so there is exactly one comparison rule in the code base: numeric,
lexicographic over ``(major, minor, patch)``.

Usage Example
-------------
>>> from melonhatch.versioning import compare_versions, parse_version
>>> parse_version("0.5.10") > parse_version("0.5.5")
True
>>> parse_version("not.a.version")
Version(major=0, minor=0, patch=0)
>>> compare_versions("0.6.0", "0.5.7")
1
"""

from __future__ import annotations

import re
from dataclasses import dataclass


__all__ = [
    "ZERO_VERSION",
    "Version",
    "compare_versions",
    "format_version",
    "parse_version",
]

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


@dataclass(frozen=True, order=True)
class Version:
    """
    A ``major.minor.patch`` version triple.

    Instances are immutable and totally ordered; ordering compares
    ``major`` first, then ``minor``, then ``patch``.

    Attributes
    ----------
    major : int
    minor : int
    patch : int
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return format_version(self.major, self.minor, self.patch)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


ZERO_VERSION = Version()


def _parse_segment(segment: str) -> int:
    match = _LEADING_DIGITS.match(segment)
    return int(match.group(1)) if match else 0


def parse_version(text: str | None) -> Version:
    """
    Parse a dotted version string into a ``Version``.

    The string is split on ``.`` and the leading digits of each of the
    first three segments are read as an integer. A segment that is absent
    or has no leading digits becomes ``0``. Segments past the third (the
    "revision" part of a Windows file version) are ignored.

    This function never raises.

    Parameters
    ----------
    text : str | None
        Version text such as ``"0.6.1.0"``. ``None`` and ``""`` are
        accepted and parse to ``0.0.0``.

    Returns
    -------
    Version
        The parsed triple, zero-filled.

    Examples
    --------
    >>> parse_version("0.5")
    Version(major=0, minor=5, patch=0)
    >>> parse_version("1.2-beta.x")
    Version(major=1, minor=2, patch=0)
    """
    if not text:
        return ZERO_VERSION

    segments = str(text).split(".")[:3]
    numbers = [_parse_segment(segment) for segment in segments]
    numbers += [0] * (3 - len(numbers))
    return Version(*numbers)


def compare_versions(a: Version | str, b: Version | str) -> int:
    """
    Three-way numeric comparison of two versions.

    Strings are parsed with ``parse_version`` first, so ``"0.5.10"`` sorts
    after ``"0.5.5"``.

    Returns
    -------
    int
        ``-1`` if ``a < b``, ``0`` if equal, ``1`` if ``a > b``.
    """
    left = a if isinstance(a, Version) else parse_version(a)
    right = b if isinstance(b, Version) else parse_version(b)

    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def format_version(major: int, minor: int, patch: int) -> str:
    """Render a version triple as ``"major.minor.patch"``."""
    return f"{major}.{minor}.{patch}"
