from typing import Any, Optional, Union

from .generation import StubGenerator
from .inspection import RuntimeInspector
from .spec import StubOptions, StubsmithError, TypeReplacement


def generate_stub(
    command: Union[str, Any], options: Optional[StubOptions] = None, **kwargs: Any
) -> str:
    """
    Returns the source of a stub function mirroring `command`.

    `command` is a callable or a target string such as "pkg.mod:func".
    Keyword arguments are forwarded to `StubOptions` when no options are
    given. Project configuration is not consulted; use `StubsmithApp` for
    that.
    """
    options = options or StubOptions(**kwargs)
    return StubGenerator().generate(RuntimeInspector().inspect(command), options)


__all__ = [
    "generate_stub",
    "StubOptions",
    "StubsmithError",
    "TypeReplacement",
]
