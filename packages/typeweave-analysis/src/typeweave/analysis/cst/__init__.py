from .annotations import (
    AnnotationVisitor,
    apply_to_annotations,
    collect_annotations,
    fill_holes,
    make_placeholder_annotation,
    parse_type_expression,
    strip_annotations,
    weave,
)
from .usage_visitor import UsageScanVisitor, extract_usage_context, find_usages

__all__ = [
    "AnnotationVisitor",
    "apply_to_annotations",
    "collect_annotations",
    "fill_holes",
    "make_placeholder_annotation",
    "parse_type_expression",
    "strip_annotations",
    "weave",
    "UsageScanVisitor",
    "extract_usage_context",
    "find_usages",
]
