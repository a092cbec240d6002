from contextlib import contextmanager
from typing import List, Dict, Any, Optional

# Import the actual singleton to patch it in-place
import typeweave.common
from typeweave.common.messaging.protocols import Renderer


class SpyRenderer(Renderer):
    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    def render(self, message: str, level: str) -> None:
        pass

    def record(self, level: str, msg_id: str, params: Dict[str, Any]):
        self.messages.append({"level": level, "id": msg_id, "params": params})


class SpyBus:
    """
    A Test Utility that spies on the global typeweave.common.bus singleton.

    Instead of replacing the bus instance (which fails if modules have already
    imported the instance via 'from typeweave.common import bus'),
    this utility patches the instance methods directly.
    """

    def __init__(self):
        self._spy_renderer = SpyRenderer()
        self.data: List[str] = []

    @contextmanager
    def patch(self, monkeypatch: Any):
        real_bus = typeweave.common.bus

        def intercept_render(level: str, msg_id: str, **kwargs: Any) -> None:
            self._spy_renderer.record(level, msg_id, kwargs)

        def intercept_data(text: str) -> None:
            self.data.append(text)

        monkeypatch.setattr(real_bus, "_render", intercept_render)
        monkeypatch.setattr(real_bus, "data", intercept_data)
        monkeypatch.setattr(real_bus, "_renderer", self._spy_renderer)

        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self._spy_renderer.messages

    def assert_id_called(self, msg_id: str, level: Optional[str] = None):
        found = False
        captured = self.get_messages()

        for msg in captured:
            if msg["id"] == msg_id and (level is None or msg["level"] == level):
                found = True
                break

        if not found:
            ids_seen = [m["id"] for m in captured]
            raise AssertionError(
                f"Message with ID '{msg_id}' was not sent.\nCaptured IDs: {ids_seen}"
            )

    def assert_id_not_called(self, msg_id: str):
        ids_seen = [m["id"] for m in self.get_messages()]
        if msg_id in ids_seen:
            raise AssertionError(
                f"Message with ID '{msg_id}' was sent unexpectedly.\nCaptured IDs: {ids_seen}"
            )
