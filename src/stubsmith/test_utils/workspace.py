import json
import sys
from contextlib import contextmanager
from pathlib import Path
from textwrap import dedent
from typing import Any, Callable, Dict, Iterator, List, Tuple

import tomli_w
import yaml


def _write_text(path: Path, content: Any) -> None:
    path.write_text(content, encoding="utf-8")


def _write_yaml(path: Path, content: Any) -> None:
    path.write_text(yaml.safe_dump(content, sort_keys=False), encoding="utf-8")


def _write_json(path: Path, content: Any) -> None:
    path.write_text(json.dumps(content, indent=2), encoding="utf-8")


def _write_toml(path: Path, content: Any) -> None:
    with path.open("wb") as f:
        tomli_w.dump(content, f)


class WorkspaceFactory:
    """
    Builds a throwaway project on disk: sources to stub, a pyproject.toml
    with [tool.stubsmith], rule files and message overrides.
    """

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._pending: List[Tuple[str, Any, Callable[[Path, Any], None]]] = []
        self._pyproject: Dict[str, Any] = {}

    def with_config(self, stubsmith_config: Dict[str, Any]) -> "WorkspaceFactory":
        self._pyproject.setdefault("tool", {})["stubsmith"] = stubsmith_config
        return self

    def with_project_name(self, name: str) -> "WorkspaceFactory":
        self._pyproject.setdefault("project", {})["name"] = name
        return self

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._pending.append((path, dedent(content), _write_text))
        return self

    def with_module(self, dotted_name: str, content: str) -> "WorkspaceFactory":
        """Adds `pkg.sub.mod` as pkg/sub/mod.py, with __init__.py files above it."""
        parts = dotted_name.split(".")
        for depth in range(1, len(parts)):
            init = "/".join(parts[:depth] + ["__init__.py"])
            if not any(path == init for path, _, _ in self._pending):
                self._pending.append((init, "", _write_text))
        return self.with_source("/".join(parts) + ".py", content)

    def with_rules(self, path: str, data: Any) -> "WorkspaceFactory":
        self._pending.append((path, data, _write_yaml))
        return self

    def with_messages(
        self, messages: Dict[str, Any], lang: str = "en"
    ) -> "WorkspaceFactory":
        """Adds project-level overrides under .stubsmith/needle/<lang>/."""
        path = f".stubsmith/needle/{lang}/overrides.json"
        self._pending.append((path, messages, _write_json))
        return self

    def build(self) -> Path:
        pending = list(self._pending)
        if self._pyproject:
            pending.append(("pyproject.toml", self._pyproject, _write_toml))

        for rel_path, content, writer in pending:
            output_path = self.root_path / rel_path
            output_path.parent.mkdir(parents=True, exist_ok=True)
            writer(output_path, content)

        return self.root_path


@contextmanager
def importable(path: Path, *module_names: str) -> Iterator[Path]:
    """
    Puts `path` on sys.path for the duration of the block and forgets the
    given modules afterwards, so tests can reuse module names.
    """
    sys.path.insert(0, str(path))
    try:
        yield path
    finally:
        sys.path.remove(str(path))
        for name in list(sys.modules):
            if any(name == m or name.startswith(f"{m}.") for m in module_names):
                del sys.modules[name]
