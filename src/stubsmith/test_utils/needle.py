from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import stubsmith.common
from stubsmith.common.messaging import MessageId
from stubsmith.needle.loader import flatten_messages


class MockNeedle:
    """In-memory templates for a bus; unknown keys resolve to themselves."""

    def __init__(self, templates: Dict[str, Any]):
        self.templates = flatten_messages(templates)

    def get(self, pointer: MessageId, lang: Optional[str] = None) -> str:
        key = str(pointer)
        return self.templates.get(key, key)

    @contextmanager
    def patch(self, monkeypatch: Any) -> Iterator["MockNeedle"]:
        monkeypatch.setattr(stubsmith.common.bus, "_needle", self)
        yield self
