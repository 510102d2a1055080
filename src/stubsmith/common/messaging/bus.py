from typing import Any, Optional, Protocol, Union

from stubsmith.needle import SemanticPointer

MessageId = Union[str, SemanticPointer]
LEVELS = ("debug", "info", "success", "warning", "error")


class Renderer(Protocol):
    def render(self, message: str, level: str) -> None:
        """Presents one resolved message; `level` is one of LEVELS."""
        ...


class TemplateSource(Protocol):
    def get(self, pointer: MessageId, lang: Optional[str] = None) -> str: ...


class MessageBus:
    """
    Routes user-facing messages: a semantic id is resolved to a template,
    formatted with the keyword arguments and handed to the renderer.
    Without a renderer every message is dropped.
    """

    def __init__(self, needle_instance: TemplateSource):
        self._needle = needle_instance
        self._renderer: Optional[Renderer] = None

    def set_renderer(self, renderer: Optional[Renderer]):
        self._renderer = renderer

    def _render(self, level: str, msg_id: MessageId, **kwargs: Any) -> None:
        if self._renderer is None:
            return

        self._renderer.render(self.render_to_string(msg_id, **kwargs), level)

    def render_to_string(self, msg_id: MessageId, **kwargs: Any) -> str:
        template = self._needle.get(msg_id)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return f"<formatting_error for '{msg_id}'>"

    def debug(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)
