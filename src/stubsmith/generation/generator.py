import keyword
import logging
from dataclasses import replace
from typing import List, Optional

from stubsmith.common import format_docstring
from stubsmith.spec import (
    Argument,
    ArgumentKind,
    CommandDef,
    StubOptions,
    StubsmithError,
)
from .blocks import extract_blocks, render_body
from .replacements import apply_type_replacements

log = logging.getLogger(__name__)

# A stub is a free function, so binding decorators never carry over.
_BINDING_DECORATORS = {"staticmethod", "classmethod", "property"}


class StubGenerationError(StubsmithError):
    """Raised when a stub cannot be emitted for the given options."""

    pass


def _is_binding_decorator(decorator: str) -> bool:
    name = decorator.split("(", 1)[0].strip()
    return name in _BINDING_DECORATORS or name.endswith(
        (".setter", ".getter", ".deleter")
    )


class StubGenerator:
    def __init__(self, indent_spaces: int = 4):
        self._indent_str = " " * indent_spaces

    def prepare(self, command: CommandDef, options: StubOptions) -> CommandDef:
        """
        Returns a copy of the command reshaped for emission: excluded
        parameters dropped, type rules applied and the stub name resolved.
        """
        name = options.name or command.name
        if not name.isidentifier() or keyword.iskeyword(name):
            raise StubGenerationError(
                f"'{name}' is not a valid function name; pass an explicit stub name."
            )

        excluded = options.excluded_names()
        source_args = list(command.args)
        if options.drops_receiver(source_args):
            log.debug(f"Dropping receiver '{source_args[0].name}' from '{command.name}'")
            source_args = source_args[1:]

        args: List[Argument] = []
        for arg in source_args:
            if arg.name in excluded:
                log.debug(f"Dropping parameter '{arg.name}' from '{command.name}'")
                continue
            args.append(
                replace(arg, annotation=self._rewrite_type(arg.annotation, options))
            )

        return replace(
            command,
            name=name,
            args=args,
            return_annotation=self._rewrite_type(command.return_annotation, options),
            docstring=command.docstring if options.include_help else None,
        )

    def _rewrite_type(
        self, annotation: Optional[str], options: StubOptions
    ) -> Optional[str]:
        if not annotation:
            return None
        rewritten = apply_type_replacements(annotation, options.type_replacements)
        return rewritten.strip() or None

    def generate(self, command: CommandDef, options: StubOptions) -> str:
        self._indent_str = " " * options.indent
        return self._generate_function(self.prepare(command, options), options)

    def _generate_args(self, args: List[Argument]) -> str:
        parts = []

        has_pos_only = any(a.kind == ArgumentKind.POSITIONAL_ONLY for a in args)
        pos_only_emitted = False
        kw_only_marker_emitted = False

        for i, arg in enumerate(args):
            if has_pos_only and not pos_only_emitted:
                if arg.kind != ArgumentKind.POSITIONAL_ONLY:
                    parts.append("/")
                    pos_only_emitted = True

            if arg.kind == ArgumentKind.KEYWORD_ONLY and not kw_only_marker_emitted:
                # *args already opens the keyword-only section.
                prev_was_var_pos = (
                    i > 0 and args[i - 1].kind == ArgumentKind.VAR_POSITIONAL
                )
                if not prev_was_var_pos:
                    parts.append("*")
                kw_only_marker_emitted = True

            arg_str = arg.name
            if arg.kind == ArgumentKind.VAR_POSITIONAL:
                arg_str = f"*{arg.name}"
            elif arg.kind == ArgumentKind.VAR_KEYWORD:
                arg_str = f"**{arg.name}"

            if arg.annotation:
                arg_str += f": {arg.annotation}"
                if arg.default is not None:
                    arg_str += f" = {arg.default}"
            elif arg.default is not None:
                arg_str += f"={arg.default}"

            parts.append(arg_str)

        if has_pos_only and not pos_only_emitted:
            parts.append("/")

        return ", ".join(parts)

    def _generate_decorators(
        self, command: CommandDef, options: StubOptions
    ) -> List[str]:
        decorators = [dec.lstrip("@") for dec in options.decorators]
        for dec in command.decorators:
            dec = dec.lstrip("@")
            if _is_binding_decorator(dec) or dec in decorators:
                continue
            decorators.append(dec)
        return [f"@{dec}" for dec in decorators]

    def _generate_function(self, func: CommandDef, options: StubOptions) -> str:
        lines = self._generate_decorators(func, options)

        prefix = "async " if func.is_async else ""
        args_str = self._generate_args(func.args)
        ret_str = f" -> {func.return_annotation}" if func.return_annotation else ""
        def_line = f"{prefix}def {func.name}({args_str}){ret_str}:"

        statements: List[str] = []
        if options.body:
            statements = render_body(extract_blocks(options.body), self._indent_str)

        has_doc = bool(func.docstring and func.docstring.strip())
        if not has_doc and not statements:
            lines.append(f"{def_line} ...")
            return "\n".join(lines)

        lines.append(def_line)
        if has_doc:
            lines.append(format_docstring(func.docstring or "", self._indent_str))
        lines.extend(statements or [f"{self._indent_str}..."])
        return "\n".join(lines)


def render_module(
    stubs: List[str], imports: List[str], docstring: Optional[str] = None
) -> str:
    sections: List[str] = []
    if docstring:
        sections.append(format_docstring(docstring, ""))
    if imports:
        sections.append("\n".join(imports))

    parts = []
    if sections:
        parts.append("\n\n".join(sections))
    parts.extend(stub.strip("\n") for stub in stubs)
    return "\n\n\n".join(parts) + "\n"
