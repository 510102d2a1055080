from .pointer import L, SemanticPointer
from .runtime import Needle, find_project_root
from .loader import JsonMessages, Loader, MessageFileHandler, YamlMessages

__all__ = [
    "L",
    "SemanticPointer",
    "Needle",
    "find_project_root",
    "Loader",
    "MessageFileHandler",
    "JsonMessages",
    "YamlMessages",
]
