"""
Tests for melonhatch.cli
========================

Tests use Typer's CliRunner for testing CLI commands.

Test Organization
-----------------
- TestVersionCommand: Tests for --version flag
- TestHelpOutput: Tests for help text
- TestNewCommand: Tests for the new command
- TestInspectCommand: Tests for the inspect command
- TestReferencesCommand: Tests for the references command
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from melonhatch import __version__
from melonhatch.cli import app


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """No user settings file and a fixed author."""
    monkeypatch.delenv("MELONHATCH_CONFIG", raising=False)
    monkeypatch.delenv("MELONHATCH_EDITOR", raising=False)
    monkeypatch.setenv("MELONHATCH_AUTHOR", "Tester")
    with patch("melonhatch.config.default_config_path", return_value=tmp_path / "absent.toml"):
        yield


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


def _flat(result) -> str:
    """Output with rich line wrapping undone."""
    return " ".join(result.stdout.split())


def _answer(value):
    """A questionary prompt stub whose ask() returns ``value``."""
    prompt = MagicMock()
    prompt.ask.return_value = value
    return prompt


# =============================================================================
# Version Command Tests
# =============================================================================

class TestVersionCommand:
    """Tests for the --version flag."""

    def test_version_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in _flat(result)

    def test_version_short_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])

        assert result.exit_code == 0
        assert __version__ in _flat(result)


# =============================================================================
# Help Output Tests
# =============================================================================

class TestHelpOutput:
    """Tests for help text."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "melonhatch" in result.stdout.lower()
        assert "new" in result.stdout
        assert "inspect" in _flat(result)

    def test_new_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["new", "--help"])

        assert result.exit_code == 0
        assert "--name" in result.stdout
        assert "--output" in _flat(result)


# =============================================================================
# New Command Tests
# =============================================================================

class TestNewCommand:
    """Tests for the new command."""

    def test_non_interactive(self, runner: CliRunner, mono_game: Path, output_dir: Path) -> None:
        result = runner.invoke(
            app,
            ["new", str(mono_game), "--name", "FooTweaks", "--output", str(output_dir), "--yes"],
        )

        assert result.exit_code == 0, result.stdout
        csproj = output_dir / "FooTweaks" / "FooTweaks.csproj"
        assert csproj.is_file()
        source = (output_dir / "FooTweaks" / "FooTweaks.cs").read_text(encoding="utf-8")
        assert '"Tester"' in source

    def test_author_option(self, runner: CliRunner, mono_game: Path, output_dir: Path) -> None:
        result = runner.invoke(
            app,
            ["new", str(mono_game), "-n", "FooTweaks", "-o", str(output_dir), "-a", "Jane", "-y"],
        )

        assert result.exit_code == 0, result.stdout
        source = (output_dir / "FooTweaks" / "FooTweaks.cs").read_text(encoding="utf-8")
        assert '"Jane"' in source

    def test_interactive_prompts(
        self, runner: CliRunner, il2cpp_game: Path, output_dir: Path,
    ) -> None:
        with (
            patch("melonhatch.cli.questionary.path", side_effect=[
                _answer(str(il2cpp_game)), _answer(str(output_dir)),
            ]),
            patch("melonhatch.cli.questionary.text", return_value=_answer("Prompted")),
        ):
            result = runner.invoke(app, ["new"])

        assert result.exit_code == 0, result.stdout
        csproj = (output_dir / "Prompted" / "Prompted.csproj").read_text(encoding="utf-8")
        assert "net6.0" in csproj

    def test_cancelled_prompt(self, runner: CliRunner) -> None:
        with patch("melonhatch.cli.questionary.path", return_value=_answer(None)):
            result = runner.invoke(app, ["new"])

        assert result.exit_code == 1
        assert "No executable file selected" in _flat(result)

    def test_cancelled_name_prompt(self, runner: CliRunner, mono_game: Path) -> None:
        with patch("melonhatch.cli.questionary.text", return_value=_answer(None)):
            result = runner.invoke(app, ["new", str(mono_game)])

        assert result.exit_code == 1
        assert "Mod name is required" in _flat(result)

    def test_yes_without_exe(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["new", "--yes"])

        assert result.exit_code == 1
        assert "No executable file selected" in _flat(result)

    def test_invalid_layout(self, runner: CliRunner, make_game, output_dir: Path) -> None:
        exe = make_game(with_framework=False)
        result = runner.invoke(
            app, ["new", str(exe), "-n", "FooTweaks", "-o", str(output_dir), "-y"],
        )

        assert result.exit_code == 1
        assert "MelonLoader is not installed" in _flat(result)

    def test_invalid_name(self, runner: CliRunner, mono_game: Path, output_dir: Path) -> None:
        result = runner.invoke(
            app, ["new", str(mono_game), "-n", "bad-name", "-o", str(output_dir), "-y"],
        )

        assert result.exit_code == 1
        assert "Invalid name" in _flat(result)

    def test_existing_project(self, runner: CliRunner, mono_game: Path, output_dir: Path) -> None:
        (output_dir / "FooTweaks").mkdir()
        result = runner.invoke(
            app, ["new", str(mono_game), "-n", "FooTweaks", "-o", str(output_dir), "-y"],
        )

        assert result.exit_code == 1
        assert "already exists" in _flat(result)

    def test_open_editor(self, runner: CliRunner, mono_game: Path, output_dir: Path) -> None:
        with patch("melonhatch.cli.open_in_editor", return_value=True) as opener:
            result = runner.invoke(
                app,
                ["new", str(mono_game), "-n", "FooTweaks", "-o", str(output_dir), "-y", "--open"],
            )

        assert result.exit_code == 0, result.stdout
        opener.assert_called_once_with(output_dir / "FooTweaks", "code")

    def test_no_open_by_default(self, runner: CliRunner, mono_game: Path, output_dir: Path) -> None:
        with patch("melonhatch.cli.open_in_editor") as opener:
            runner.invoke(
                app, ["new", str(mono_game), "-n", "FooTweaks", "-o", str(output_dir), "-y"],
            )

        opener.assert_not_called()

    def test_settings_file(
        self, runner: CliRunner, mono_game: Path, output_dir: Path, tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("MELONHATCH_AUTHOR")
        settings = tmp_path / "settings.toml"
        settings.write_text('author = "FromFile"\n')

        result = runner.invoke(
            app,
            ["--config", str(settings), "new", str(mono_game), "-n", "FooTweaks",
             "-o", str(output_dir), "-y"],
        )

        assert result.exit_code == 0, result.stdout
        source = (output_dir / "FooTweaks" / "FooTweaks.cs").read_text(encoding="utf-8")
        assert '"FromFile"' in source

    def test_broken_settings_file(self, runner: CliRunner, tmp_path: Path) -> None:
        settings = tmp_path / "settings.toml"
        settings.write_text("this is not toml")

        result = runner.invoke(app, ["--config", str(settings), "inspect", "x.exe"])

        assert result.exit_code == 1
        assert "Cannot read settings file" in _flat(result)


# =============================================================================
# Inspect Command Tests
# =============================================================================

class TestInspectCommand:
    """Tests for the inspect command."""

    def test_shows_detection(self, runner: CliRunner, il2cpp_game: Path) -> None:
        result = runner.invoke(app, ["inspect", str(il2cpp_game)])

        assert result.exit_code == 0
        assert "IL2CPP" in result.stdout
        assert "0.6.1" in result.stdout
        assert "Test Game" in _flat(result)

    def test_invalid_layout(self, runner: CliRunner, tmp_path: Path) -> None:
        exe = tmp_path / "Nothing.exe"
        exe.write_bytes(b"")

        result = runner.invoke(app, ["inspect", str(exe)])

        assert result.exit_code == 1
        assert "Unity game Data folder" in _flat(result)


# =============================================================================
# References Command Tests
# =============================================================================

class TestReferencesCommand:
    """Tests for the references command."""

    def test_lists_paths(self, runner: CliRunner, mono_game: Path) -> None:
        result = runner.invoke(app, ["references", str(mono_game)])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[-1].endswith("UnityEngine.CoreModule.dll")
        assert not any("mscorlib" in line for line in lines)

    def test_xml(self, runner: CliRunner, mono_game: Path) -> None:
        result = runner.invoke(app, ["references", str(mono_game), "--xml"])

        assert result.exit_code == 0
        assert '<Reference Include="Assembly-CSharp">' in _flat(result)
