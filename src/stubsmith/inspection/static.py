import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, cast

import griffe

from stubsmith.spec import Argument, ArgumentKind, CommandDef
from .targets import InspectionError, split_target

_KIND_MAP = {
    griffe.ParameterKind.positional_only: ArgumentKind.POSITIONAL_ONLY,
    griffe.ParameterKind.positional_or_keyword: ArgumentKind.POSITIONAL_OR_KEYWORD,
    griffe.ParameterKind.var_positional: ArgumentKind.VAR_POSITIONAL,
    griffe.ParameterKind.keyword_only: ArgumentKind.KEYWORD_ONLY,
    griffe.ParameterKind.var_keyword: ArgumentKind.VAR_KEYWORD,
}


class StaticInspector:
    """
    Reflects commands from source text with Griffe, without importing them.

    Targets are either "path/to/file.py:Qual.name" or "pkg.mod:Qual.name";
    a dotted module is looked up on the search paths as a file.
    """

    def __init__(self, search_paths: Optional[Sequence[Path]] = None):
        if search_paths is None:
            search_paths = [Path.cwd()] + [Path(p) for p in sys.path if p]
        self.search_paths: List[Path] = list(search_paths)

    def _locate(self, module_str: str) -> Tuple[str, Path]:
        if module_str.endswith(".py") or "/" in module_str or "\\" in module_str:
            path = Path(module_str)
            if not path.is_file():
                raise InspectionError(f"Source file '{module_str}' does not exist.")
            return path.stem, path

        relative = Path(*module_str.split("."))
        for root in self.search_paths:
            for candidate in (
                root / relative.with_suffix(".py"),
                root / relative / "__init__.py",
            ):
                if candidate.is_file():
                    return module_str, candidate

        raise InspectionError(
            f"Could not find the source of module '{module_str}' on the search paths."
        )

    def _resolve(self, module: griffe.Module, qualname: str, label: str) -> Any:
        obj: Any = module
        for part in qualname.split("."):
            try:
                obj = obj.members[part]
            except (KeyError, AttributeError) as e:
                raise InspectionError(f"'{label}' was not found in the source.") from e
            if obj.is_alias:
                raise InspectionError(
                    f"'{label}' is imported from elsewhere; point at its defining module."
                )
        return obj

    def inspect(self, command: str) -> CommandDef:
        if not isinstance(command, str):
            raise InspectionError("Static inspection needs a 'module:name' target.")

        module_str, qualname = split_target(command)
        module_name, path = self._locate(module_str)

        try:
            code = path.read_text(encoding="utf-8")
            griffe_module = griffe.visit(
                module_name, filepath=cast(Any, path), code=code
            )
        except (OSError, SyntaxError, UnicodeDecodeError) as e:
            raise InspectionError(f"Could not read the source of '{command}': {e}") from e

        obj = self._resolve(griffe_module, qualname, command)

        if obj.is_function:
            return self._map_function(cast(griffe.Function, obj), obj.name)
        if obj.is_class:
            return self._map_class(cast(griffe.Class, obj))
        raise InspectionError(f"'{command}' is neither a function nor a class.")

    def _map_class(self, gc: griffe.Class) -> CommandDef:
        # A class is called through its constructor; `self` is dropped later
        # with the other common parameters. Class decorators never apply to
        # the stub function.
        init = gc.members.get("__init__")
        if init is not None and not init.is_alias and init.is_function:
            command = self._map_function(cast(griffe.Function, init), gc.name)
            command.decorators = []
            command.return_annotation = None
        else:
            command = CommandDef(name=gc.name, module=gc.module.path)
        command.docstring = gc.docstring.value if gc.docstring else None
        return command

    def _map_function(self, gf: griffe.Function, name: str) -> CommandDef:
        return CommandDef(
            name=name,
            args=[self._map_argument(p) for p in gf.parameters],
            return_annotation=str(gf.returns) if gf.returns else None,
            docstring=gf.docstring.value if gf.docstring else None,
            is_async="async" in gf.labels,
            decorators=[str(d.value) for d in gf.decorators],
            module=gf.module.path,
        )

    def _map_argument(self, param: griffe.Parameter) -> Argument:
        kind = ArgumentKind.POSITIONAL_OR_KEYWORD
        if param.kind is not None:
            kind = _KIND_MAP.get(param.kind, ArgumentKind.POSITIONAL_OR_KEYWORD)
        annotation = str(param.annotation) if param.annotation else None
        default = str(param.default) if param.default is not None else None
        return Argument(
            name=param.name, kind=kind, annotation=annotation, default=default
        )
