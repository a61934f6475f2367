"""CLI smoke tests."""

from __future__ import annotations

from typer.testing import CliRunner

from sarifbridge import __version__, app


def test_package_imports() -> None:
    """Ensure the package imports with expected metadata."""
    assert __version__


def test_cli_help_runs() -> None:
    """Ensure CLI wiring is operational."""
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "SarifBridge" in result.stdout


def test_version_command_prints_version() -> None:
    """The version command echoes the package version."""
    result = CliRunner().invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
