"""Basic tests for shac."""

from typer.testing import CliRunner

from shac import __version__
from shac.cli import app


def test_version() -> None:
    """Test that version is defined and follows semantic versioning."""
    import re

    assert isinstance(__version__, str)
    assert re.match(r"^\d+\.\d+\.\d+$", __version__), f"Version '{__version__}' is not semver"


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "compile" in result.stdout
    assert "version" in result.stdout


def test_cli_compile_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["compile", "--help"])
    assert result.exit_code == 0
    assert "--outdir" in result.stdout
    assert "--assetdir" in result.stdout
    assert "--root" in result.stdout
    assert "--stdin" in result.stdout
