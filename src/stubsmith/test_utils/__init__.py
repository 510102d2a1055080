from .bus import SpyBus
from .needle import MockNeedle
from .workspace import WorkspaceFactory, importable

__all__ = ["SpyBus", "MockNeedle", "WorkspaceFactory", "importable"]
