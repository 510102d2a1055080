import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from stubsmith.spec import StubsmithError, TypeReplacement
from stubsmith.generation.replacements import compile_rules, load_rules_file

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib


class ConfigError(StubsmithError):
    """Raised when [tool.stubsmith] holds an invalid value."""

    pass


@dataclass
class StubsmithConfig:
    common_parameters: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    exclude_common: bool = True
    include_help: bool = True
    decorators: List[str] = field(default_factory=list)
    type_replacements: List[TypeReplacement] = field(default_factory=list)
    config_path: Optional[Path] = None


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def _expect_str_list(data: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = data.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"[tool.stubsmith] '{key}' must be a list of strings.")
    return list(value)


def _expect_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"[tool.stubsmith] '{key}' must be true or false.")
    return value


def _load_replacements(data: Dict[str, Any], base_dir: Path) -> List[TypeReplacement]:
    table = data.get("type_replacements", {})
    if not isinstance(table, dict):
        raise ConfigError("[tool.stubsmith] 'type_replacements' must be a table.")
    rules = compile_rules(table)

    for rules_file in _expect_str_list(data, "rules_files", []):
        rules.extend(load_rules_file(base_dir / rules_file))
    return rules


def load_config_from_path(search_path: Path) -> StubsmithConfig:
    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        return StubsmithConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Could not parse {config_path}: {e}") from e

    tool_data: Dict[str, Any] = data.get("tool", {}).get("stubsmith", {})
    if not isinstance(tool_data, dict):
        raise ConfigError("[tool.stubsmith] must be a table.")

    return StubsmithConfig(
        common_parameters=_expect_str_list(tool_data, "common_parameters", []),
        exclude=_expect_str_list(tool_data, "exclude", []),
        exclude_common=_expect_bool(tool_data, "exclude_common", True),
        include_help=_expect_bool(tool_data, "include_help", True),
        decorators=_expect_str_list(tool_data, "decorators", []),
        type_replacements=_load_replacements(tool_data, config_path.parent),
        config_path=config_path,
    )
