import re
from typing import Iterable, List, Set

from stubsmith.spec import CommandDef

# Symbols that reflected annotations commonly use without a module prefix.
TYPING_SYMBOLS = {
    "Any",
    "AsyncIterator",
    "Awaitable",
    "Callable",
    "ClassVar",
    "Coroutine",
    "Dict",
    "Final",
    "FrozenSet",
    "Generator",
    "Iterable",
    "Iterator",
    "List",
    "Literal",
    "Mapping",
    "NoReturn",
    "Optional",
    "Sequence",
    "Set",
    "Tuple",
    "Type",
    "Union",
}

_DOTTED_NAME_RE = re.compile(r"(?<![\w.'\"])([A-Za-z_]\w*(?:\.[A-Za-z_]\w*)+)")
_IMPLICIT_MODULES = {"typing", "builtins"}


def _module_of(dotted: str) -> str:
    # pkg.mod.Outer.Inner -> pkg.mod; np.ndarray -> np
    parts = dotted.split(".")
    module_parts: List[str] = []
    for part in parts[:-1]:
        if part[:1].isupper():
            break
        module_parts.append(part)
    return ".".join(module_parts)


def _scan_annotation(annotation: str, typing_names: Set[str], modules: Set[str]):
    for symbol in TYPING_SYMBOLS:
        if re.search(rf"(?<![\w.]){symbol}\b", annotation):
            typing_names.add(symbol)

    for match in _DOTTED_NAME_RE.finditer(annotation):
        module = _module_of(match.group(1))
        if module and module.split(".")[0] not in _IMPLICIT_MODULES:
            modules.add(module)


def collect_imports(commands: Iterable[CommandDef]) -> List[str]:
    """
    Derives the import lines needed by the annotations of the given commands.

    This is a textual heuristic: bare typing symbols become a
    `from typing import ...` line and dotted references become
    `import <module>`, where the module path ends before the first
    capitalised segment.
    """
    typing_names: Set[str] = set()
    modules: Set[str] = set()

    for command in commands:
        for annotation in command.annotations():
            _scan_annotation(annotation, typing_names, modules)

    lines = [f"import {module}" for module in sorted(modules)]
    if typing_names:
        lines.append(f"from typing import {', '.join(sorted(typing_names))}")
    return lines
