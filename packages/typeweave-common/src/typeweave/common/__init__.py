__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .messaging import MessageBus, Renderer, bus

__all__ = ["MessageBus", "Renderer", "bus"]
