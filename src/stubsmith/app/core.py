import importlib
import inspect
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from stubsmith.common import bus
from stubsmith.config import StubsmithConfig, load_config_from_path
from stubsmith.generation import (
    StubGenerationError,
    StubGenerator,
    collect_imports,
    render_module,
)
from stubsmith.inspection import InspectionError, RuntimeInspector
from stubsmith.needle import L
from stubsmith.spec import (
    CommandDef,
    CommandInspectorProtocol,
    StubGeneratorProtocol,
    StubOptions,
    TypeReplacement,
)


def _is_stubbable(obj: Any) -> bool:
    # Classes are stubbed through their constructor signature.
    return inspect.isroutine(obj) or inspect.isclass(obj)


class StubsmithApp:
    def __init__(
        self,
        root_path: Path,
        inspector: Optional[CommandInspectorProtocol] = None,
        generator: Optional[StubGeneratorProtocol] = None,
        config: Optional[StubsmithConfig] = None,
    ):
        self.root_path = root_path
        self.inspector = inspector or RuntimeInspector()
        self.generator = generator or StubGenerator()
        self.config = config or load_config_from_path(root_path)

    def options_from_config(
        self,
        name: Optional[str] = None,
        body: Optional[str] = None,
        type_replacements: Iterable[TypeReplacement] = (),
        exclude: Iterable[str] = (),
        exclude_common: Optional[bool] = None,
        include_help: Optional[bool] = None,
        decorators: Iterable[str] = (),
        indent: int = 4,
    ) -> StubOptions:
        """
        Merges project configuration with per-call overrides.

        List-valued overrides extend the configured values; command-line
        type rules run after the configured ones.
        """
        cfg = self.config
        return StubOptions(
            name=name,
            body=body,
            type_replacements=[*cfg.type_replacements, *type_replacements],
            exclude_common=cfg.exclude_common if exclude_common is None else exclude_common,
            common_parameters=list(cfg.common_parameters),
            exclude=[*cfg.exclude, *exclude],
            include_help=cfg.include_help if include_help is None else include_help,
            decorators=[*cfg.decorators, *decorators],
            indent=indent,
        )

    def generate_stub(
        self,
        target: Union[str, Any],
        options: Optional[StubOptions] = None,
        with_imports: bool = False,
    ) -> str:
        options = options or self.options_from_config()
        command = self.inspector.inspect(target)
        source = self.generator.generate(command, options)

        bus.debug(L.stub.generated, name=options.name or command.name, target=target)

        if not with_imports:
            return source
        imports = collect_imports([self.generator.prepare(command, options)])
        return render_module([source], imports)

    def _public_callables(
        self, module: Any, include_imported: bool
    ) -> List[Tuple[str, Any]]:
        members = []
        for name, obj in inspect.getmembers(module, _is_stubbable):
            if name.startswith("_"):
                continue
            if not include_imported and getattr(obj, "__module__", None) != module.__name__:
                continue
            members.append((name, obj))
        return members

    def generate_module_stubs(
        self,
        module_name: str,
        options: Optional[StubOptions] = None,
        include_imported: bool = False,
    ) -> str:
        options = options or self.options_from_config()
        if options.name:
            raise StubGenerationError("A stub name cannot be set for a whole module.")

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise InspectionError(f"Could not import module '{module_name}': {e}") from e

        stubs: List[str] = []
        prepared: List[CommandDef] = []
        for name, obj in self._public_callables(module, include_imported):
            try:
                command = self.inspector.inspect(obj)
                # Aliases such as `load = _load` are stubbed under the public name.
                command.name = name
                stubs.append(self.generator.generate(command, options))
                prepared.append(self.generator.prepare(command, options))
            except (InspectionError, StubGenerationError) as e:
                bus.warning(L.stub.module.skipped, name=name, reason=e)

        if not stubs:
            bus.warning(L.stub.module.empty, module=module_name)
        else:
            bus.debug(L.stub.module.generated, count=len(stubs), module=module_name)

        return render_module(
            stubs,
            collect_imports(prepared),
            docstring=bus.render_to_string(
                L.stub.module.docstring, module=module_name
            ),
        )
