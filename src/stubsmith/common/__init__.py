from pathlib import Path

from stubsmith.needle import Needle, find_project_root
from .formatting import format_docstring
from .messaging.bus import MessageBus

# --- Composition Root for stubsmith's core services ---

_assets_root = Path(__file__).parent / "assets"

# Packaged messages first; the current project may override them.
stubsmith_needle = Needle(roots=[_assets_root, find_project_root()])

bus = MessageBus(needle_instance=stubsmith_needle)

__all__ = [
    "bus",
    "stubsmith_needle",
    "format_docstring",
    "MessageBus",
]
