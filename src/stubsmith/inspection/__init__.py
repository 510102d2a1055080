from .targets import InspectionError, load_target, parse_target, split_target
from .runtime import RuntimeInspector
from .static import StaticInspector

__all__ = [
    "InspectionError",
    "load_target",
    "parse_target",
    "split_target",
    "RuntimeInspector",
    "StaticInspector",
]
