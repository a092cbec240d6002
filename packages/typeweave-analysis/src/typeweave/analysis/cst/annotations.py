import logging
from typing import Callable, Iterable, List, Optional

import libcst as cst

from typeweave.spec import AnnotationKind, DEFAULT_HOLE_MARKER

log = logging.getLogger(__name__)

AnnotationValue = Optional[cst.Annotation]
AnnotationTransform = Callable[[AnnotationValue], AnnotationValue]

# Receivers without an annotation are not annotation sites.
IMPLICIT_PARAMS = frozenset({"self", "cls"})


def make_placeholder_annotation(name: str) -> cst.Annotation:
    return cst.Annotation(annotation=cst.Name(value=name))


class AnnotationVisitor(cst.CSTTransformer):
    """
    Visits every type annotation site of a tree and writes back whatever the
    given transform returns for it.

    Sites are parameter annotations, return annotations and the annotation of
    an annotated assignment. A site without an annotation is passed to the
    transform as None, and returning None clears it again. Annotated
    assignments cannot exist without an annotation, so None is written there
    as the hole placeholder. An unannotated `self` or `cls` is only a site
    with `include_receivers`.

    Sites are handed to the transform in pre-order: the parameters of a
    function first, then its return annotation, then everything in its body.
    """

    def __init__(
        self,
        transform: AnnotationTransform,
        kinds: Optional[Iterable[AnnotationKind]] = None,
        hole: str = DEFAULT_HOLE_MARKER,
        include_receivers: bool = False,
    ):
        self.transform = transform
        self.kinds = set(kinds) if kinds is not None else set(AnnotationKind)
        self.hole = hole
        self.include_receivers = include_receivers
        self._lambda_depth = 0
        self._returns_stack: List[AnnotationValue] = []

    def _apply(self, kind: AnnotationKind, value: AnnotationValue) -> AnnotationValue:
        if kind not in self.kinds:
            return value
        return self.transform(value)

    def visit_Lambda(self, node: cst.Lambda) -> Optional[bool]:
        self._lambda_depth += 1
        return True

    def leave_Lambda(
        self, original_node: cst.Lambda, updated_node: cst.Lambda
    ) -> cst.BaseExpression:
        self._lambda_depth -= 1
        return updated_node

    def leave_Param(self, original_node: cst.Param, updated_node: cst.Param) -> cst.Param:
        # Lambda parameters cannot carry annotations.
        if self._lambda_depth:
            return updated_node
        if (
            not self.include_receivers
            and updated_node.annotation is None
            and updated_node.name.value in IMPLICIT_PARAMS
        ):
            return updated_node
        return updated_node.with_changes(
            annotation=self._apply(AnnotationKind.PARAMETER, updated_node.annotation)
        )

    def visit_FunctionDef_returns(self, node: cst.FunctionDef) -> None:
        # Fires between the parameters and the body, also when there is no
        # return annotation, which keeps the transform calls in pre-order.
        self._returns_stack.append(self._apply(AnnotationKind.RETURN, node.returns))

    def leave_FunctionDef(
        self, original_node: cst.FunctionDef, updated_node: cst.FunctionDef
    ) -> cst.FunctionDef:
        return updated_node.with_changes(returns=self._returns_stack.pop())

    def leave_AnnAssign(
        self, original_node: cst.AnnAssign, updated_node: cst.AnnAssign
    ) -> cst.AnnAssign:
        annotation = self._apply(AnnotationKind.VARIABLE, updated_node.annotation)
        if annotation is None:
            annotation = make_placeholder_annotation(self.hole)
        return updated_node.with_changes(annotation=annotation)


def apply_to_annotations(
    tree: cst.Module,
    transform: AnnotationTransform,
    kinds: Optional[Iterable[AnnotationKind]] = None,
    hole: str = DEFAULT_HOLE_MARKER,
    include_receivers: bool = False,
) -> cst.Module:
    return tree.visit(
        AnnotationVisitor(
            transform, kinds=kinds, hole=hole, include_receivers=include_receivers
        )
    )


def render_annotation(tree: cst.Module, annotation: cst.Annotation) -> str:
    return tree.code_for_node(annotation.annotation).strip()


def _gather_annotations(
    tree: cst.Module,
    kinds: Optional[Iterable[AnnotationKind]] = None,
    include_receivers: bool = False,
) -> List[AnnotationValue]:
    found: List[AnnotationValue] = []

    def record(annotation: AnnotationValue) -> AnnotationValue:
        found.append(annotation)
        return annotation

    apply_to_annotations(
        tree, record, kinds=kinds, include_receivers=include_receivers
    )
    return found


def collect_annotations(
    tree: cst.Module, kinds: Optional[Iterable[AnnotationKind]] = None
) -> List[Optional[str]]:
    return [
        render_annotation(tree, annotation) if annotation is not None else None
        for annotation in _gather_annotations(tree, kinds=kinds)
    ]


def weave(
    original: cst.Module,
    nettle: cst.Module,
    kinds: Optional[Iterable[AnnotationKind]] = None,
) -> cst.Module:
    """
    Transplants the annotations of `nettle`, a typed copy of `original`, back
    into `original`. Sites are paired in visit order. A site the nettle leaves
    unannotated keeps whatever `original` has there.

    Raises ValueError when the two trees do not have the same number of
    annotation sites.
    """
    donors = _gather_annotations(nettle, kinds=kinds, include_receivers=True)
    site_count = len(
        _gather_annotations(original, kinds=kinds, include_receivers=True)
    )
    if site_count != len(donors):
        raise ValueError(
            f"Cannot weave: original has {site_count} annotation site(s), "
            f"nettle has {len(donors)}."
        )

    remaining = iter(donors)

    def transplant(annotation: AnnotationValue) -> AnnotationValue:
        donor = next(remaining)
        return donor if donor is not None else annotation

    log.debug(f"Weaving {site_count} annotation site(s)")
    return apply_to_annotations(
        original, transplant, kinds=kinds, include_receivers=True
    )


def fill_holes(
    tree: cst.Module,
    hole: str = DEFAULT_HOLE_MARKER,
    kinds: Optional[Iterable[AnnotationKind]] = None,
) -> cst.Module:
    """Gives every site that lacks an annotation the hole placeholder."""

    def fill(annotation: AnnotationValue) -> AnnotationValue:
        if annotation is None:
            return make_placeholder_annotation(hole)
        return annotation

    return apply_to_annotations(tree, fill, kinds=kinds, hole=hole)


def strip_annotations(
    tree: cst.Module,
    hole: str = DEFAULT_HOLE_MARKER,
    kinds: Optional[Iterable[AnnotationKind]] = None,
) -> cst.Module:
    """Removes every annotation. Annotated assignments keep a hole instead."""
    return apply_to_annotations(tree, lambda _: None, kinds=kinds, hole=hole)


def parse_type_expression(text: str) -> Optional[str]:
    """
    Normalises a type produced by a model, e.g. ``" List[int] "``.

    Falls back to the first line when the whole text does not parse, since
    models tend to keep writing after the type. Returns None if neither is a
    single valid expression.
    """
    stripped = text.strip()
    if not stripped:
        return None

    candidates = [stripped]
    first_line = stripped.splitlines()[0].strip()
    if first_line != stripped:
        candidates.append(first_line)

    for candidate in candidates:
        try:
            expression = cst.parse_expression(candidate)
        except cst.ParserSyntaxError:
            log.debug(f"Not a type expression: {candidate!r}")
            continue
        return cst.Module(body=[]).code_for_node(expression).strip()
    return None
