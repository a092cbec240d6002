# This must be the very first line to allow this package to coexist with other
# namespace packages in editable installs.
__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .models import (
    AnnotationKind,
    CheckProblem,
    CompletionCheck,
    UsageContext,
    WeakTypeRule,
    DEFAULT_HOLE_MARKER,
    DEFAULT_PLACEHOLDER,
    DEFAULT_WEAK_TYPES,
)

__all__ = [
    "AnnotationKind",
    "CheckProblem",
    "CompletionCheck",
    "UsageContext",
    "WeakTypeRule",
    "DEFAULT_HOLE_MARKER",
    "DEFAULT_PLACEHOLDER",
    "DEFAULT_WEAK_TYPES",
]
