from typing import Any, Dict, Optional

from .messages import MESSAGES
from .protocols import Renderer


class MessageBus:
    def __init__(self, templates: Optional[Dict[str, str]] = None):
        self._renderer: Optional[Renderer] = None
        self._templates = templates if templates is not None else MESSAGES

    def set_renderer(self, renderer: Renderer):
        self._renderer = renderer

    def _render(self, level: str, msg_id: str, **kwargs: Any) -> None:
        if not self._renderer:
            return

        template = self._templates.get(msg_id, msg_id)
        try:
            message = template.format(**kwargs)
        except KeyError:
            message = f"<formatting_error for '{msg_id}'>"

        self._renderer.render(message, level)

    def debug(self, msg_id: str, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: str, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: str, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: str, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: str, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)

    def data(self, text: str) -> None:
        """Emits raw output, such as rendered code, without template lookup."""
        if self._renderer:
            self._renderer.render(text, "data")


# Global singleton instance
bus = MessageBus()
