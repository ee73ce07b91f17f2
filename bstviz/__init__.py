"""Binary search tree algorithm engine with step-by-step animation traces."""

from .errors import BSTVizError, ExportError, InputError
from .generators import (
    GENERATORS,
    Trace,
    build_trace,
    generate,
    generate_inorder_steps,
    generate_insert_steps,
    generate_lower_bound_steps,
    generate_max_steps,
    generate_min_steps,
    generate_postorder_steps,
    generate_predecessor_steps,
    generate_preorder_steps,
    generate_remove_steps,
    generate_search_steps,
    generate_select_steps,
    generate_successor_steps,
    operation_label,
)
from .player import PlaybackView, Player
from .pseudocode import PSEUDOCODE
from .steps import NO_NODE, Operation, Step, StepResult
from .tree import (
    EMPTY,
    Node,
    Tree,
    build_from_sequence,
    count,
    height,
    inorder_values,
    insert,
    remove,
)

__version__ = "1.0.0"

__all__ = [
    "BSTVizError",
    "EMPTY",
    "ExportError",
    "GENERATORS",
    "InputError",
    "NO_NODE",
    "Node",
    "Operation",
    "PSEUDOCODE",
    "PlaybackView",
    "Player",
    "Step",
    "StepResult",
    "Trace",
    "Tree",
    "build_from_sequence",
    "build_trace",
    "count",
    "generate",
    "generate_inorder_steps",
    "generate_insert_steps",
    "generate_lower_bound_steps",
    "generate_max_steps",
    "generate_min_steps",
    "generate_postorder_steps",
    "generate_predecessor_steps",
    "generate_preorder_steps",
    "generate_remove_steps",
    "generate_search_steps",
    "generate_select_steps",
    "generate_successor_steps",
    "height",
    "inorder_values",
    "insert",
    "operation_label",
    "remove",
]
