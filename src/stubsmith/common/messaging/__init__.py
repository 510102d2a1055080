from .bus import LEVELS, MessageBus, MessageId, Renderer, TemplateSource

__all__ = ["LEVELS", "MessageBus", "MessageId", "Renderer", "TemplateSource"]
