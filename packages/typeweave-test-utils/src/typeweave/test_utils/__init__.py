from .bus import SpyBus
from .helpers import parse
from .workspace import WorkspaceFactory

__all__ = ["SpyBus", "WorkspaceFactory", "parse"]
