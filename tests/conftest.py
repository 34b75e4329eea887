"""
pytest configuration and shared fixtures for melonhatch tests.

Fixtures defined here are automatically available to all tests.

Fixtures
--------
make_pe : Callable
    Builds the bytes of a minimal PE image carrying a file version.

make_game : Callable
    Builds a fake Unity game installation with MelonLoader in tmp_path.

mono_game, il2cpp_game : Path
    Executable paths of ready-made MelonLoader 0.6.1 installations.
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from melonhatch.models import RuntimeBackend


# =============================================================================
# PE Images
# =============================================================================

def build_pe(major: int, minor: int, build: int, revision: int = 0) -> bytes:
    """Smallest byte string the file version reader accepts."""
    header = bytearray(0x80)
    header[0:2] = b"MZ"
    struct.pack_into("<I", header, 0x3C, 0x40)
    header[0x40:0x44] = b"PE\x00\x00"
    fixed_info = struct.pack(
        "<IIII",
        0xFEEF04BD,
        0x00010000,
        (major << 16) | minor,
        (build << 16) | revision,
    )
    return bytes(header) + b"\x00" * 32 + fixed_info + b"\x00" * 32


@pytest.fixture
def make_pe() -> Callable[..., bytes]:
    return build_pe


# =============================================================================
# Game Layouts
# =============================================================================

# Every framework file any MelonLoader release could have. The resolver has
# to pick the right subset, so the fake installation contains all of them.
ALL_FRAMEWORK_FILES = (
    "MelonLoader.dll",
    "0Harmony.dll",
    "ValueTupleBridge.dll",
    "net35/MelonLoader.dll",
    "net35/0Harmony.dll",
    "net35/ValueTupleBridge.dll",
    "net6/MelonLoader.dll",
    "net6/0Harmony.dll",
    "net6/Il2CppInterop.Runtime.dll",
    "net6/Il2CppInterop.Common.dll",
)

DEFAULT_MANAGED = (
    "Assembly-CSharp.dll",
    "UnityEngine.CoreModule.dll",
    "mscorlib.dll",
    "netstandard.dll",
    "Mono.Security.dll",
    "System.Core.dll",
    "System.dll",
)


def _touch(path: Path, content: bytes = b"") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


@pytest.fixture
def make_game(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory for fake game installations.

    Returns a function that creates ``<tmp>/<folder>/Game.exe`` plus its
    ``Game_Data`` directory and a ``MelonLoader`` directory, and returns
    the executable path.
    """

    def _make(
        version: tuple[int, int, int] | None = (0, 6, 1),
        backend: RuntimeBackend = RuntimeBackend.STANDARD,
        *,
        folder: str = "Game",
        app_info: str | None = "Test Studio\nTest Game\n",
        framework_files: Iterable[str] = ALL_FRAMEWORK_FILES,
        managed: Iterable[str] = DEFAULT_MANAGED,
        with_data: bool = True,
        with_framework: bool = True,
    ) -> Path:
        root = tmp_path / folder
        exe = root / "Game.exe"
        _touch(exe)

        data = root / "Game_Data"
        if with_data:
            data.mkdir()
            if app_info is not None:
                (data / "app.info").write_text(app_info, encoding="utf-8")
            if backend is RuntimeBackend.ALT_RUNTIME:
                _touch(data / "il2cpp_data" / "Metadata" / "global-metadata.dat", b"\xaf\x1b\xb1\xfa")

        if with_framework:
            framework = root / "MelonLoader"
            framework.mkdir()
            for relative in framework_files:
                _touch(framework / relative, b"stub")
            if version is not None:
                probe = framework / backend.framework_subdir / "MelonLoader.dll"
                _touch(probe, build_pe(*version))

            if backend is RuntimeBackend.ALT_RUNTIME:
                for sweep_dir in ("Il2CppAssemblies", "Managed"):
                    for name in managed:
                        _touch(framework / sweep_dir / name, b"stub")

        if with_data and backend is RuntimeBackend.STANDARD:
            for name in managed:
                _touch(data / "Managed" / name, b"stub")

        return exe

    return _make


@pytest.fixture
def mono_game(make_game: Callable[..., Path]) -> Path:
    """MelonLoader 0.6.1 on a Mono game."""
    return make_game((0, 6, 1), RuntimeBackend.STANDARD)


@pytest.fixture
def il2cpp_game(make_game: Callable[..., Path]) -> Path:
    """MelonLoader 0.6.1 on an IL2CPP game."""
    return make_game((0, 6, 1), RuntimeBackend.ALT_RUNTIME)

