from .blocks import BodyFragmentError, extract_blocks, render_body
from .generator import StubGenerationError, StubGenerator, render_module
from .imports import collect_imports
from .replacements import (
    TypeReplacementError,
    apply_type_replacements,
    compile_rules,
    load_rules_file,
    parse_rule,
)

__all__ = [
    "BodyFragmentError",
    "extract_blocks",
    "render_body",
    "StubGenerationError",
    "StubGenerator",
    "render_module",
    "collect_imports",
    "TypeReplacementError",
    "apply_type_replacements",
    "compile_rules",
    "load_rules_file",
    "parse_rule",
]
