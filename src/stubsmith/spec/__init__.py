from .models import (
    Argument,
    ArgumentKind,
    BodyBlocks,
    CommandDef,
    RECEIVER_PARAMETERS,
    StubOptions,
    TypeReplacement,
)
from .protocols import CommandInspectorProtocol, StubGeneratorProtocol
from .errors import StubsmithError

__all__ = [
    "Argument",
    "ArgumentKind",
    "BodyBlocks",
    "CommandDef",
    "RECEIVER_PARAMETERS",
    "StubOptions",
    "TypeReplacement",
    "CommandInspectorProtocol",
    "StubGeneratorProtocol",
    "StubsmithError",
]
