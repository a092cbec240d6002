__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .checker import check_completion, verify
from .cst import (
    AnnotationVisitor,
    apply_to_annotations,
    collect_annotations,
    extract_usage_context,
    fill_holes,
    find_usages,
    make_placeholder_annotation,
    parse_type_expression,
    strip_annotations,
    weave,
)

__all__ = [
    "check_completion",
    "verify",
    "AnnotationVisitor",
    "apply_to_annotations",
    "collect_annotations",
    "extract_usage_context",
    "fill_holes",
    "find_usages",
    "make_placeholder_annotation",
    "parse_type_expression",
    "strip_annotations",
    "weave",
]
