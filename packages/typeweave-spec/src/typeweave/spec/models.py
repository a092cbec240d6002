from dataclasses import dataclass, field
from enum import Enum
from typing import List

import libcst as cst


class AnnotationKind(str, Enum):
    PARAMETER = "parameter"
    RETURN = "return"
    VARIABLE = "variable"


class CheckProblem(str, Enum):
    # The completion still has holes or missing annotations.
    NOT_COMPLETE = "NotComplete"
    # The completion added/removed code that isn't a type.
    CHANGED_CODE = "ChangedCode"
    # The completion added/removed comments.
    CHANGED_COMMENTS = "ChangedComments"


@dataclass(frozen=True)
class WeakTypeRule:
    """A substring that marks an uninformative annotation and its weight."""

    needle: str
    weight: int


DEFAULT_HOLE_MARKER = "_hole_"
DEFAULT_PLACEHOLDER = "_placeholder_"
DEFAULT_WEAK_TYPES = (
    WeakTypeRule("any", 5),
    WeakTypeRule("unknown", 3),
    WeakTypeRule("undefined", 2),
)


@dataclass
class CompletionCheck:
    problems: List[CheckProblem] = field(default_factory=list)
    # Sum of weak-type weights. Higher means a lazier completion.
    score: int = 0

    @property
    def is_complete(self) -> bool:
        return not self.problems


@dataclass
class UsageContext:
    name: str
    statements: List[cst.BaseStatement] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.statements)

    @property
    def header(self) -> str:
        return f"# Usages of '{self.name}' are shown below:\n"

    def render(self) -> str:
        if not self.statements:
            return ""
        return self.header + cst.Module(body=self.statements).code
