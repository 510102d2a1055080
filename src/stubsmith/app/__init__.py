from .core import StubsmithApp

__all__ = ["StubsmithApp"]
