import logging
import re
from pathlib import Path
from typing import Iterable, List, Mapping, Tuple, Union

import yaml

from stubsmith.spec import StubsmithError, TypeReplacement

log = logging.getLogger(__name__)

RuleSource = Union[
    Mapping[str, str], Iterable[Union[TypeReplacement, Tuple[str, str]]]
]


class TypeReplacementError(StubsmithError):
    """Raised for malformed type replacement rules."""

    pass


def _validate(rule: TypeReplacement) -> TypeReplacement:
    try:
        # Compiling the template against an empty subject surfaces bad group refs.
        re.compile(rule.pattern).sub(rule.replacement, "")
    except re.error as e:
        raise TypeReplacementError(
            f"Invalid type replacement '{rule.pattern}' -> '{rule.replacement}': {e}"
        ) from e
    return rule


def compile_rules(source: RuleSource) -> List[TypeReplacement]:
    if isinstance(source, Mapping):
        pairs = list(source.items())
    else:
        pairs = list(source)

    rules: List[TypeReplacement] = []
    for item in pairs:
        if isinstance(item, TypeReplacement):
            rule = item
        else:
            pattern, replacement = item
            if not isinstance(pattern, str) or not isinstance(replacement, str):
                raise TypeReplacementError(
                    f"Type replacement rules must map strings to strings, got {item!r}."
                )
            rule = TypeReplacement(pattern=pattern, replacement=replacement)
        rules.append(_validate(rule))
    return rules


def parse_rule(text: str) -> TypeReplacement:
    """
    Parses the command-line form "PATTERN=REPLACEMENT".

    The split happens on the last "=", so patterns may still contain
    look-arounds such as "(?=...)".
    """
    pattern, sep, replacement = text.rpartition("=")
    if not sep or not pattern:
        raise TypeReplacementError(
            f"Type replacement '{text}' must look like PATTERN=REPLACEMENT."
        )
    return _validate(TypeReplacement(pattern=pattern, replacement=replacement))


def load_rules_file(path: Path) -> List[TypeReplacement]:
    """
    Loads rules from YAML. Two shapes are accepted:

        "^somepkg\\.": ""          # mapping of pattern -> replacement

        - pattern: "Frame"          # ordered list of items
          replacement: "Any"
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise TypeReplacementError(f"Could not read rules file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise TypeReplacementError(f"Could not parse rules file {path}: {e}") from e

    if content is None:
        return []

    if isinstance(content, dict):
        return compile_rules({str(k): v for k, v in content.items()})

    if isinstance(content, list):
        pairs = []
        for entry in content:
            if (
                not isinstance(entry, dict)
                or "pattern" not in entry
                or "replacement" not in entry
            ):
                raise TypeReplacementError(
                    f"Rules file {path}: each item needs 'pattern' and 'replacement'."
                )
            pairs.append((entry["pattern"], entry["replacement"]))
        return compile_rules(pairs)

    raise TypeReplacementError(
        f"Rules file {path} must hold a mapping or a list of rules."
    )


def apply_type_replacements(text: str, rules: Iterable[TypeReplacement]) -> str:
    result = text
    for rule in rules:
        result = re.sub(rule.pattern, rule.replacement, result)
    if result != text:
        log.debug(f"Type '{text}' rewritten to '{result}'")
    return result
