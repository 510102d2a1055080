import importlib
from typing import Any, Tuple

from stubsmith.spec import StubsmithError


class InspectionError(StubsmithError):
    """Custom exception for errors during command inspection."""

    pass


def split_target(target: str) -> Tuple[str, str]:
    """Splits "pkg.mod:Qual.name" into its module and qualified name."""
    module_str, sep, qualname = target.partition(":")
    if not sep or not module_str or not qualname:
        raise InspectionError(
            f"Target '{target}' must look like 'module:name' (e.g. 'json:dumps')."
        )
    return module_str, qualname


def parse_target(target: str) -> Tuple[str, str]:
    """
    Resolves a target to (module, qualname).

    Both "pkg.mod:Qual.name" and the dotted "pkg.mod.Qual.name" forms are
    accepted. The dotted form imports the longest importable prefix.
    """
    if ":" in target:
        return split_target(target)

    parts = target.split(".")
    if len(parts) < 2 or not all(parts):
        raise InspectionError(
            f"Target '{target}' must name a module and an attribute (e.g. 'json.dumps')."
        )

    for split_at in range(len(parts) - 1, 0, -1):
        module_str = ".".join(parts[:split_at])
        try:
            importlib.import_module(module_str)
        except ModuleNotFoundError as e:
            # Only a missing prefix means "try a shorter one".
            if e.name and module_str.startswith(e.name):
                continue
            raise InspectionError(f"Could not import '{module_str}': {e}") from e
        except ImportError as e:
            raise InspectionError(f"Could not import '{module_str}': {e}") from e
        return module_str, ".".join(parts[split_at:])

    raise InspectionError(f"No importable module found in target '{target}'.")


def load_target(target: str) -> Any:
    module_str, qualname = parse_target(target)
    try:
        obj: Any = importlib.import_module(module_str)
    except ImportError as e:
        raise InspectionError(f"Could not load target '{target}': {e}") from e

    for attr in qualname.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise InspectionError(f"Could not load target '{target}': {e}") from e
    return obj
