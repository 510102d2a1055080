from typing import Any, Protocol, Union

from .models import CommandDef, StubOptions


class CommandInspectorProtocol(Protocol):
    def inspect(self, command: Union[str, Any]) -> CommandDef:
        """
        Reflects a command's public metadata.

        Args:
            command: A callable object, or a target string such as
                "pkg.mod:func" that locates one.

        Raises:
            InspectionError: If the command cannot be located or reflected.
        """
        ...


class StubGeneratorProtocol(Protocol):
    def prepare(self, command: CommandDef, options: StubOptions) -> CommandDef: ...

    def generate(self, command: CommandDef, options: StubOptions) -> str: ...
