import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from .loader import Loader
from .pointer import SemanticPointer

PROJECT_MARKERS = ("pyproject.toml", ".git")


def find_project_root(start_dir: Optional[Path] = None) -> Path:
    """Returns the nearest directory holding one of PROJECT_MARKERS."""
    origin = (start_dir or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    return origin


class Needle:
    """
    Resolves message keys to templates.

    Every root contributes `needle/<lang>` (packaged messages) and
    `.stubsmith/needle/<lang>` (project overrides); later roots win. A key
    missing from the requested language falls back to the default
    language, then to the key itself.
    """

    def __init__(
        self,
        roots: Optional[List[Path]] = None,
        default_lang: str = "en",
        lang_env_var: str = "STUBSMITH_LANG",
        loader: Optional[Loader] = None,
    ):
        self.roots: List[Path] = list(roots) if roots else [find_project_root()]
        self.default_lang = default_lang
        self.lang_env_var = lang_env_var
        self._loader = loader or Loader()
        self._tables: Dict[str, Dict[str, str]] = {}

    def add_root(self, path: Path):
        if path not in self.roots:
            self.roots.append(path)
            self._tables.clear()

    def current_lang(self) -> str:
        return os.getenv(self.lang_env_var) or self.default_lang

    def table(self, lang: str) -> Dict[str, str]:
        if lang not in self._tables:
            merged: Dict[str, str] = {}
            for root in self.roots:
                for lang_dir in (
                    root / "needle" / lang,
                    root / ".stubsmith" / "needle" / lang,
                ):
                    merged.update(self._loader.load_directory(lang_dir))
            self._tables[lang] = merged
        return self._tables[lang]

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        key = str(pointer)
        # dict.fromkeys keeps the order and drops a repeated default language
        for candidate in dict.fromkeys((lang or self.current_lang(), self.default_lang)):
            value = self.table(candidate).get(key)
            if value is not None:
                return value
        return key
