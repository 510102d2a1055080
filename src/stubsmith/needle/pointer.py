from typing import Any


class SemanticPointer:
    """
    A dotted message address assembled by attribute access.

    `L.stub.module.skipped` is the key "stub.module.skipped". Pointers are
    immutable and hashable, so they can be stored and compared with plain
    strings.
    """

    __slots__ = ("_key",)

    def __init__(self, key: str = ""):
        object.__setattr__(self, "_key", key)

    def __getattr__(self, name: str) -> "SemanticPointer":
        # copy, pickle and friends probe for dunders; those are not keys.
        if name.startswith("__"):
            raise AttributeError(name)
        return SemanticPointer(f"{self._key}.{name}" if self._key else name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("SemanticPointer is immutable")

    def __str__(self) -> str:
        return self._key

    def __repr__(self) -> str:
        return f"L.{self._key}" if self._key else "L"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SemanticPointer):
            return self._key == other._key
        if isinstance(other, str):
            return self._key == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key)

    def __reduce__(self):
        return (SemanticPointer, (self._key,))


L = SemanticPointer()
