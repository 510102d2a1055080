from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import stubsmith.common
from stubsmith.common.messaging import MessageId


class SpyBus:
    """
    Records what the global bus was asked to say.

    Modules hold `from stubsmith.common import bus`, so the singleton is
    patched in place rather than replaced. Ids and parameters are recorded
    as sent; templates are never resolved.
    """

    def __init__(self):
        self._messages: List[Dict[str, Any]] = []

    def _record(self, level: str, msg_id: MessageId, **kwargs: Any) -> None:
        self._messages.append({"level": level, "id": str(msg_id), "params": kwargs})

    @contextmanager
    def patch(self, monkeypatch: Any) -> Iterator["SpyBus"]:
        monkeypatch.setattr(stubsmith.common.bus, "_render", self._record)
        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return list(self._messages)

    def ids(self, level: Optional[str] = None) -> List[str]:
        return [
            m["id"] for m in self._messages if level is None or m["level"] == level
        ]

    def assert_id_called(self, msg_id: MessageId, level: Optional[str] = None):
        if str(msg_id) not in self.ids(level):
            raise AssertionError(
                f"Message with ID '{msg_id}' was not sent"
                f"{f' at level {level!r}' if level else ''}.\n"
                f"Captured IDs: {self.ids()}"
            )
