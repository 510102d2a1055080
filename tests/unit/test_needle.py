import copy
import json
from pathlib import Path

import pytest

import stubsmith.common
from stubsmith.needle import L, Needle, SemanticPointer, find_project_root


def _write_messages(directory: Path, name: str, data: dict) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(json.dumps(data), encoding="utf-8")


def test_needle_multi_root_loading_and_override(tmp_path: Path):
    # Root 1: a packaged asset directory
    pkg_asset_root = tmp_path / "pkg" / "assets"
    _write_messages(
        pkg_asset_root / "needle" / "en" / "cli",
        "main.json",
        {"cli.default": "I am a default", "cli.override_me": "Default Value"},
    )

    # Root 2: a user's project directory with overrides
    project_root = tmp_path / "my_project"
    project_root.mkdir()
    (project_root / "pyproject.toml").touch()
    _write_messages(
        project_root / ".stubsmith" / "needle" / "en",
        "overrides.json",
        {"cli.override_me": "User Override!", "cli.user_only": "I am from the user"},
    )

    rt = Needle(roots=[pkg_asset_root])
    rt.add_root(project_root)

    assert rt.get(L.cli.default) == "I am a default"
    assert rt.get(L.cli.user_only) == "I am from the user"
    assert rt.get(L.cli.override_me) == "User Override!"
    assert rt.get(L.unknown.key) == "unknown.key"


def test_language_falls_back_to_default(tmp_path: Path, monkeypatch):
    _write_messages(tmp_path / "needle" / "en", "stub.json", {"a": "A", "b": "B"})
    _write_messages(tmp_path / "needle" / "fr", "stub.json", {"a": "A (fr)"})
    monkeypatch.setenv("STUBSMITH_LANG", "fr")

    rt = Needle(roots=[tmp_path])

    assert rt.get(L.a) == "A (fr)"
    assert rt.get(L.b) == "B"
    assert rt.get(L.a, lang="en") == "A"


def test_unreadable_files_are_skipped(tmp_path: Path):
    lang_dir = tmp_path / "needle" / "en"
    _write_messages(lang_dir, "good.json", {"ok": "fine"})
    (lang_dir / "bad.json").write_text("{not json", encoding="utf-8")

    assert Needle(roots=[tmp_path]).get(L.ok) == "fine"


def test_semantic_pointer_paths():
    pointer = L.stub.module.skipped

    assert str(pointer) == "stub.module.skipped"
    assert pointer == "stub.module.skipped"
    assert pointer == SemanticPointer("stub.module.skipped")
    assert {pointer: 1}[L.stub.module.skipped] == 1
    assert repr(pointer) == "L.stub.module.skipped"


def test_semantic_pointer_is_immutable_and_copyable():
    pointer = L.stub.written
    assert copy.deepcopy(pointer) == pointer
    with pytest.raises(AttributeError):
        pointer.extra = 1


def test_yaml_and_nested_messages(tmp_path: Path):
    lang_dir = tmp_path / "needle" / "en"
    _write_messages(lang_dir, "a.json", {"stub": {"written": "nested json"}})
    (lang_dir / "b.yaml").write_text(
        "stub:\n  module:\n    empty: nested yaml\n", encoding="utf-8"
    )
    (lang_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    rt = Needle(roots=[tmp_path])

    assert rt.get(L.stub.written) == "nested json"
    assert rt.get(L.stub.module.empty) == "nested yaml"


def test_find_project_root(tmp_path: Path):
    (tmp_path / "pyproject.toml").touch()
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path.resolve()


def test_project_overrides_packaged_messages(workspace_factory):
    root = workspace_factory.with_messages({"stub": {"written": "Saved {path}"}}).build()
    packaged = stubsmith.common.stubsmith_needle.roots[0]

    rt = Needle(roots=[packaged, root])

    assert rt.get(L.stub.written) == "Saved {path}"
    assert rt.get(L.stub.error) == "Could not generate a stub: {error}"
