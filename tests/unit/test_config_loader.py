import pytest

from stubsmith.config import ConfigError, StubsmithConfig, load_config_from_path
from stubsmith.generation import TypeReplacementError
from stubsmith.spec import TypeReplacement


def test_missing_pyproject_gives_defaults(tmp_path):
    config = load_config_from_path(tmp_path)

    assert config == StubsmithConfig()
    assert config.exclude_common is True
    assert config.common_parameters == []


def test_load_config_reads_tool_table(workspace_factory):
    root = (
        workspace_factory.with_config(
            {
                "common_parameters": ["ctx"],
                "exclude": ["debug"],
                "include_help": False,
                "decorators": ["pytest.fixture"],
                "type_replacements": {r"np\.ndarray": "Any"},
                "rules_files": ["stub-rules.yaml"],
            }
        )
        .with_rules("stub-rules.yaml", {"Frame": "Any"})
        .build()
    )

    config = load_config_from_path(root)

    assert config.common_parameters == ["ctx"]
    assert config.exclude == ["debug"]
    assert config.exclude_common is True
    assert config.include_help is False
    assert config.decorators == ["pytest.fixture"]
    # Inline rules run before the rules files
    assert config.type_replacements == [
        TypeReplacement(r"np\.ndarray", "Any"),
        TypeReplacement("Frame", "Any"),
    ]
    assert config.config_path == root / "pyproject.toml"


def test_config_is_found_from_a_subdirectory(workspace_factory):
    root = (
        workspace_factory.with_project_name("demo")
        .with_config({"exclude": ["verbose"]})
        .with_source("src/demo/__init__.py", "")
        .build()
    )

    config = load_config_from_path(root / "src" / "demo")

    assert config.exclude == ["verbose"]
    assert config.config_path == root / "pyproject.toml"


def test_pyproject_without_tool_table(workspace_factory):
    root = workspace_factory.with_project_name("demo").build()
    config = load_config_from_path(root)

    assert config.exclude == []
    assert config.config_path == root / "pyproject.toml"


@pytest.mark.parametrize(
    "tool_config",
    [
        {"exclude": "debug"},
        {"common_parameters": [1, 2]},
        {"include_help": "no"},
        {"type_replacements": ["int"]},
    ],
)
def test_invalid_values_raise(workspace_factory, tool_config):
    root = workspace_factory.with_config(tool_config).build()
    with pytest.raises(ConfigError):
        load_config_from_path(root)


def test_invalid_rule_raises(workspace_factory):
    root = workspace_factory.with_config({"type_replacements": {"List[": "list"}}).build()
    with pytest.raises(TypeReplacementError):
        load_config_from_path(root)


def test_broken_toml_raises(workspace_factory):
    root = workspace_factory.with_source("pyproject.toml", "[tool.stubsmith\n").build()
    with pytest.raises(ConfigError, match="Could not parse"):
        load_config_from_path(root)
