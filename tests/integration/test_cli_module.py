from typer.testing import CliRunner

from stubsmith.cli.main import app

runner = CliRunner()


def test_module_stubs_written_to_file(toolkit):
    result = runner.invoke(app, ["module", "toolkit", "-o", "fakes.py"])

    assert result.exit_code == 0, result.output
    # `broken` has no readable signature and is reported, not fatal
    assert "Skipping 'broken'" in result.output

    text = (toolkit.root_path / "fakes.py").read_text(encoding="utf-8")
    assert text.startswith('"""Stubs generated from \'toolkit\'."""\n')
    assert "import pathlib\nfrom typing import Any, Dict\n" in text
    assert "def add(a: int, b: int = 0) -> int:" in text
    assert "def total(a: int, b: int = 0) -> int:" in text
    assert "def load(path: pathlib.Path, mode: str = 'r') -> Dict[str, Any]:" in text
    assert "_hidden" not in text
    assert "def dumps" not in text
    assert text.endswith("    ...\n")


def test_module_with_options(toolkit):
    result = runner.invoke(
        app,
        [
            "module",
            "toolkit",
            "--no-help",
            "--include-imported",
            "-x",
            "b",
            "-d",
            "fake",
            "-o",
            "fakes.py",
        ],
    )

    assert result.exit_code == 0, result.output
    text = (toolkit.root_path / "fakes.py").read_text(encoding="utf-8")
    assert "@fake\ndef add(a: int) -> int: ..." in text
    assert "@fake\ndef dumps(obj, *, skipkeys=False" in text
    assert '"""Add numbers."""' not in text


def test_module_import_failure_exits_with_code_one(workspace_factory):
    result = runner.invoke(app, ["module", "surely_missing_module_xyz"])

    assert result.exit_code == 1
    assert "Could not import module" in result.output


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "stub" in result.output
    assert "module" in result.output
