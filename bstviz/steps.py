"""Step records and the recorder the generators write them through."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

Number = Union[int, float]

# Node value of terminal steps that point at no node (e.g. "not found").
NO_NODE = None


class StepResult(Enum):
    FOUND = "found"
    NOT_FOUND = "not-found"


class Operation(Enum):
    """Every operation that can be replayed as a step sequence."""

    SEARCH = "search"
    LOWER_BOUND = "lower_bound"
    MIN = "min"
    MAX = "max"
    INSERT = "insert"
    REMOVE = "remove"
    PREDECESSOR = "predecessor"
    SUCCESSOR = "successor"
    SELECT = "select"
    INORDER = "inorder"
    PREORDER = "preorder"
    POSTORDER = "postorder"

    @property
    def takes_argument(self) -> bool:
        return self not in _NO_ARGUMENT

    @property
    def mutates(self) -> bool:
        return self in (Operation.INSERT, Operation.REMOVE)


_NO_ARGUMENT = frozenset({
    Operation.MIN, Operation.MAX,
    Operation.INORDER, Operation.PREORDER, Operation.POSTORDER,
})


def format_value(value: Optional[Number]) -> str:
    """Render a key the way status messages show it (37.0 → "37")."""
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Step:
    """
    One frame of an animated operation.

    Attributes:
        node_value     : Value of the node under examination, or NO_NODE.
        status_text    : Message shown in the status bar.
        highlight_line : 0-based index into the operation's pseudocode.
        visited        : Values visited so far, oldest first.  A tuple,
                         so no two steps ever share a mutable trail.
        result         : Set on the final step only.
    """

    node_value: Optional[Number]
    status_text: str
    highlight_line: int
    visited: Tuple[Number, ...] = ()
    result: Optional[StepResult] = None

    @property
    def is_terminal(self) -> bool:
        return self.result is not None

    def to_dict(self) -> dict:
        return {
            "node_value": self.node_value,
            "status_text": self.status_text,
            "highlight_line": self.highlight_line,
            "visited": list(self.visited),
            "result": self.result.value if self.result else None,
        }


@dataclass
class StepRecorder:
    """
    Accumulates steps for a single generator run.

    ``visit()`` grows the trail; ``record()`` freezes the current
    trail into a new Step.  ``steps`` is the finished sequence.
    """

    steps: List[Step] = field(default_factory=list)
    visited: List[Number] = field(default_factory=list)

    def visit(self, value: Number) -> None:
        self.visited.append(value)

    def record(self, node_value: Optional[Number], status_text: str,
               highlight_line: int,
               result: Optional[StepResult] = None) -> None:
        self.steps.append(Step(
            node_value=node_value,
            status_text=status_text,
            highlight_line=highlight_line,
            visited=tuple(self.visited),
            result=result,
        ))

    def found(self, node_value, status_text, highlight_line) -> None:
        self.record(node_value, status_text, highlight_line, StepResult.FOUND)

    def not_found(self, node_value, status_text, highlight_line) -> None:
        self.record(node_value, status_text, highlight_line, StepResult.NOT_FOUND)

    def finish_last(self, suffix: str, result: StepResult) -> None:
        """Append ``suffix`` to the last step's text and tag it with ``result``."""
        last = self.steps[-1]
        self.steps[-1] = replace(last, status_text=last.status_text + suffix,
                                 result=result)
