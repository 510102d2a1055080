import ast
import enum
import inspect
import logging
import re
from typing import Any, List, Union

from stubsmith.spec import Argument, ArgumentKind, CommandDef
from .targets import InspectionError, load_target

log = logging.getLogger(__name__)

_KIND_MAP = {
    inspect.Parameter.POSITIONAL_ONLY: ArgumentKind.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD: ArgumentKind.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL: ArgumentKind.VAR_POSITIONAL,
    inspect.Parameter.KEYWORD_ONLY: ArgumentKind.KEYWORD_ONLY,
    inspect.Parameter.VAR_KEYWORD: ArgumentKind.VAR_KEYWORD,
}

_FORWARD_REF_RE = re.compile(r"ForwardRef\('([^']*)'[^)]*\)")


def _get_annotation_str(annotation: Any) -> str:
    """Gets the source text of a type annotation."""
    if annotation is inspect.Parameter.empty:
        return ""

    # Postponed annotations (PEP 563) already are source text.
    if isinstance(annotation, str):
        return annotation

    return _FORWARD_REF_RE.sub(r"\1", inspect.formatannotation(annotation))


def _get_enum_str(value: enum.Enum) -> str:
    enum_type = type(value)
    if value.name in enum_type.__members__:
        return f"{enum_type.__name__}.{value.name}"

    # A composite flag is spelled as the OR of its single-bit members.
    if isinstance(value, enum.Flag) and isinstance(value.value, int) and value.value:
        bits = [
            member
            for member in dict.fromkeys(enum_type.__members__.values())
            if member.value > 0
            and member.value & (member.value - 1) == 0
            and value.value & member.value == member.value
        ]
        covered = 0
        for member in bits:
            covered |= member.value
        if covered == value.value:
            return " | ".join(f"{enum_type.__name__}.{member.name}" for member in bits)

    log.debug(f"Default {value!r} has no member spelling; emitting '...'")
    return "..."


def _get_default_str(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return _get_enum_str(value)

    text = repr(value)
    try:
        ast.parse(text, mode="eval")
    except SyntaxError:
        log.debug(f"Default {text} is not an expression; emitting '...'")
        return "..."
    return text


def _command_name(obj: Any) -> str:
    name = getattr(obj, "__name__", None)
    if isinstance(name, str):
        return name
    return type(obj).__name__


class RuntimeInspector:
    """Reflects commands by importing them and reading their live signature."""

    def inspect(self, command: Union[str, Any]) -> CommandDef:
        if isinstance(command, str):
            label = command
            target = load_target(command)
        else:
            label = _command_name(command)
            target = command

        if not callable(target):
            raise InspectionError(f"'{label}' is not callable.")

        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as e:
            raise InspectionError(
                f"Could not inspect signature of '{label}': {e}"
            ) from e

        args: List[Argument] = []
        for param in signature.parameters.values():
            default_val = None
            if param.default is not inspect.Parameter.empty:
                default_val = _get_default_str(param.default)

            args.append(
                Argument(
                    name=param.name,
                    kind=_KIND_MAP[param.kind],
                    annotation=_get_annotation_str(param.annotation) or None,
                    default=default_val,
                )
            )

        return_annotation = _get_annotation_str(signature.return_annotation)

        return CommandDef(
            name=_command_name(target),
            args=args,
            docstring=inspect.getdoc(target),
            return_annotation=return_annotation or None,
            is_async=inspect.iscoroutinefunction(target),
            module=getattr(target, "__module__", None),
        )
