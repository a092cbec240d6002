import logging
from collections import Counter
from typing import List, Optional, Sequence, Tuple

import libcst as cst

from typeweave.analysis.cst.annotations import (
    AnnotationValue,
    apply_to_annotations,
    make_placeholder_annotation,
    render_annotation,
)
from typeweave.spec import (
    CheckProblem,
    CompletionCheck,
    DEFAULT_HOLE_MARKER,
    DEFAULT_PLACEHOLDER,
    DEFAULT_WEAK_TYPES,
    WeakTypeRule,
)
from typeweave.config import TypeweaveConfig

log = logging.getLogger(__name__)

# Whitespace and comments carry no code structure.
TRIVIA_NODES = (
    cst.SimpleWhitespace,
    cst.ParenthesizedWhitespace,
    cst.EmptyLine,
    cst.TrailingWhitespace,
    cst.Newline,
    cst.Comment,
)


def count_nodes(node: cst.CSTNode) -> int:
    count = 1
    for child in node.children:
        if isinstance(child, TRIVIA_NODES):
            continue
        count += count_nodes(child)
    return count


def classify_annotation(
    text: str,
    hole_marker: str = DEFAULT_HOLE_MARKER,
    weak_types: Sequence[WeakTypeRule] = DEFAULT_WEAK_TYPES,
) -> Optional[int]:
    """
    Returns the weight of a rendered annotation, or None when it is a hole.
    The first matching rule wins and unmatched text weighs nothing.
    """
    lowered = text.lower()
    if hole_marker.lower() in lowered:
        return None
    for rule in weak_types:
        if rule.needle.lower() in lowered:
            return rule.weight
    return 0


def score_completion(
    completed: cst.Module,
    hole_marker: str = DEFAULT_HOLE_MARKER,
    weak_types: Sequence[WeakTypeRule] = DEFAULT_WEAK_TYPES,
    kinds=None,
) -> Tuple[bool, int]:
    is_complete = True
    score = 0

    def observe(annotation: AnnotationValue) -> AnnotationValue:
        nonlocal is_complete, score
        # A missing annotation means the model removed or never filled it.
        if annotation is None:
            is_complete = False
            return annotation

        text = render_annotation(completed, annotation)
        weight = classify_annotation(text, hole_marker, weak_types)
        if weight is None:
            is_complete = False
        else:
            score += weight
        log.debug(f"Annotation {text!r} weighs {weight}")
        return annotation

    apply_to_annotations(completed, observe, kinds=kinds, hole=hole_marker)
    return is_complete, score


def neutralize_annotations(
    tree: cst.Module, placeholder: str = DEFAULT_PLACEHOLDER
) -> cst.Module:
    """
    Returns a copy of the tree with every annotation site set to one
    placeholder. Receivers count as sites here, so annotating `self` is not
    a code change.
    """
    return apply_to_annotations(
        tree.deep_clone(),
        lambda _: make_placeholder_annotation(placeholder),
        hole=placeholder,
        include_receivers=True,
    )


def same_skeleton(
    original: cst.Module,
    completed: cst.Module,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> bool:
    original_count = count_nodes(neutralize_annotations(original, placeholder))
    completed_count = count_nodes(neutralize_annotations(completed, placeholder))
    log.debug(f"Skeleton node counts: original={original_count}, completed={completed_count}")
    return original_count == completed_count


class CommentCollector(cst.CSTVisitor):
    def __init__(self):
        self.comments: List[str] = []

    def visit_Comment(self, node: cst.Comment) -> None:
        self.comments.append(node.value.strip())


def _comments_of(tree: cst.Module) -> Counter:
    collector = CommentCollector()
    tree.visit(collector)
    return Counter(collector.comments)


def check_completion(
    original: cst.Module,
    completed: cst.Module,
    config: Optional[TypeweaveConfig] = None,
) -> CompletionCheck:
    config = config or TypeweaveConfig()

    is_complete, score = score_completion(
        completed,
        hole_marker=config.hole_marker,
        weak_types=config.weak_types,
        kinds=config.kinds,
    )
    if not is_complete:
        return CompletionCheck(problems=[CheckProblem.NOT_COMPLETE], score=score)

    problems: List[CheckProblem] = []
    if not same_skeleton(original, completed, config.placeholder):
        problems.append(CheckProblem.CHANGED_CODE)
    if _comments_of(original) != _comments_of(completed):
        problems.append(CheckProblem.CHANGED_COMMENTS)
    return CompletionCheck(problems=problems, score=score)


def verify(
    original: cst.Module,
    completed: cst.Module,
    config: Optional[TypeweaveConfig] = None,
) -> Tuple[bool, int]:
    """
    Decides whether `completed` fills every annotation hole of `original`
    without touching anything but annotations.

    Returns ``(is_complete, score)``. The score sums the weights of weak
    annotations such as ``any``; a higher score means a lazier completion.
    Comment changes are not taken into account here, use
    :func:`check_completion` for those.
    """
    check = check_completion(original, completed, config)
    accepted = not (
        CheckProblem.NOT_COMPLETE in check.problems
        or CheckProblem.CHANGED_CODE in check.problems
    )
    return accepted, check.score
