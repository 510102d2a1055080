import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Sequence

import yaml

log = logging.getLogger(__name__)


class MessageFileHandler(Protocol):
    suffixes: Sequence[str]

    def load(self, path: Path) -> Any: ...


class JsonMessages:
    suffixes = (".json",)

    def load(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)


class YamlMessages:
    suffixes = (".yaml", ".yml")

    def load(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)


def flatten_messages(content: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """
    Turns nested tables into dotted keys, so {"stub": {"written": "..."}}
    and {"stub.written": "..."} address the same message.
    """
    flat: Dict[str, str] = {}
    for key, value in content.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_messages(value, full_key))
        else:
            flat[full_key] = str(value)
    return flat


class Loader:
    """Reads every message file below a language directory into one table."""

    def __init__(self, handlers: Optional[Iterable[MessageFileHandler]] = None):
        self.handlers = list(handlers) if handlers else [JsonMessages(), YamlMessages()]

    def _handler_for(self, path: Path) -> Optional[MessageFileHandler]:
        suffix = path.suffix.lower()
        for handler in self.handlers:
            if suffix in handler.suffixes:
                return handler
        return None

    def load_file(self, path: Path) -> Dict[str, str]:
        handler = self._handler_for(path)
        if handler is None:
            return {}

        try:
            content = handler.load(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            log.warning(f"Skipping unreadable message file {path}: {e}")
            return {}

        if content is None:
            return {}
        if not isinstance(content, Mapping):
            log.warning(f"Skipping message file {path}: expected a table of messages")
            return {}
        return flatten_messages(content)

    def load_directory(self, root_path: Path) -> Dict[str, str]:
        registry: Dict[str, str] = {}
        if not root_path.is_dir():
            return registry

        # Sorted so that overlapping keys resolve the same way everywhere.
        for file_path in sorted(p for p in root_path.rglob("*") if p.is_file()):
            registry.update(self.load_file(file_path))
        return registry
