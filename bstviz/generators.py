"""
╔══════════════════════════════════════════════════════════════════╗
║                 bstviz — STEP GENERATOR ENGINE                   ║
║                                                                  ║
║  Replays one BST operation against a tree snapshot and records   ║
║  every comparison / move / outcome as a Step.                    ║
║                                                                  ║
║  Data Flow                                                       ║
║  ─────────                                                       ║
║  1. Caller picks an Operation and a tree snapshot                ║
║  2. generate_*_steps() walks the tree; before evaluating a node  ║
║     it calls rec.visit(value), then rec.record(...) freezes the  ║
║     trail into a Step                                            ║
║  3. The final Step carries StepResult.FOUND / NOT_FOUND          ║
║  4. build_trace() bundles steps + pseudocode + result tree for   ║
║     the player, renderer and exporters                           ║
║                                                                  ║
║  Every generator is pure and deterministic, and always returns   ║
║  at least one (terminal) step. Failures are steps, not raises.   ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from . import tree as bst
from .pseudocode import PSEUDOCODE
from .steps import (NO_NODE, Number, Operation, Step, StepRecorder,
                    StepResult, format_value as _f)
from .tree import Tree

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  SEARCH FAMILY: exact search, lower bound, min, max
# ═════════════════════════════════════════════════════════════════

def generate_search_steps(tree: Tree, target: Number) -> List[Step]:
    """
    Exact search for ``target``.

    Pseudocode lines: 5 go right, 6 go left, 3 found, 1 not found.
    """
    rec = StepRecorder()
    current = tree
    while current is not None:
        rec.visit(current.value)
        v, t = _f(current.value), _f(target)
        if current.value == target:
            rec.found(current.value, f"{v} == {t}, found!", 3)
            return rec.steps
        if current.value < target:
            rec.record(current.value, f"{v} < {t}, go right", 5)
            current = current.right
        else:
            rec.record(current.value, f"{v} > {t}, go left", 6)
            current = current.left

    rec.not_found(NO_NODE, f"Value {_f(target)} is not found.", 1)
    return rec.steps


def generate_lower_bound_steps(tree: Tree, target: Number) -> List[Step]:
    """
    Smallest value >= ``target``.

    Every node that qualifies becomes the new candidate and the
    walk continues left looking for a smaller one.  The terminal
    step points at the candidate (or NO_NODE when there is none).
    """
    rec = StepRecorder()
    current = tree
    best = None
    while current is not None:
        rec.visit(current.value)
        v, t = _f(current.value), _f(target)
        if current.value >= target:
            best = current.value
            rec.record(current.value,
                       f"{v} >= {t}, update result={v}, go left", 5)
            current = current.left
        else:
            rec.record(current.value, f"{v} < {t}, go right", 6)
            current = current.right

    if best is not None:
        rec.found(best, f"Lower bound of {_f(target)} is {_f(best)}.", 2)
    else:
        rec.not_found(NO_NODE, f"No lower bound found for {_f(target)}.", 2)
    return rec.steps


def _extreme_steps(tree: Tree, go_left: bool) -> List[Step]:
    """Shared walk for min (go_left=True) and max (go_left=False)."""
    rec = StepRecorder()
    if tree is None:
        rec.not_found(NO_NODE, "Tree is empty.", 1)
        return rec.steps

    side, extreme = ("left", "minimum") if go_left else ("right", "maximum")
    current = tree
    child = current.left if go_left else current.right
    while child is not None:
        rec.visit(current.value)
        rec.record(current.value, f"{_f(current.value)} has {side} child, go {side}", 4)
        current = child
        child = current.left if go_left else current.right

    rec.visit(current.value)
    rec.found(current.value,
              f"{_f(current.value)} has no {side} child — {extreme} found!", 3)
    return rec.steps


def generate_min_steps(tree: Tree) -> List[Step]:
    return _extreme_steps(tree, go_left=True)


def generate_max_steps(tree: Tree) -> List[Step]:
    return _extreme_steps(tree, go_left=False)


# ═════════════════════════════════════════════════════════════════
#  INSERT
#
#  Walk down as in search.  On reaching the empty slot two steps
#  are emitted: the parent ("null, insert here") and a synthetic
#  step for the new node whose trail ends with the inserted value.
# ═════════════════════════════════════════════════════════════════

def generate_insert_steps(tree: Tree, value: Number) -> List[Step]:
    rec = StepRecorder()
    x = _f(value)

    if tree is None:
        rec.found(value, f"Tree is empty — create node {x}.", 1)
        return rec.steps

    current = tree
    while current is not None:
        rec.visit(current.value)
        v = _f(current.value)

        if value == current.value:
            rec.not_found(current.value, f"{v} == {x}, duplicate — ignored.", 6)
            return rec.steps

        go_left = value < current.value
        child = current.left if go_left else current.right
        side, sign, line = ("left", "<", 3) if go_left else ("right", ">", 5)

        if child is None:
            rec.record(current.value,
                       f"{x} {sign} {v}, go {side} — null, insert here.", 1)
            rec.visit(value)
            rec.found(value, f"Created new node {x}.", 1)
            return rec.steps

        rec.record(current.value, f"{x} {sign} {v}, go {side}.", line)
        current = child

    return rec.steps        # unreachable: the loop always returns


# ═════════════════════════════════════════════════════════════════
#  REMOVE
#
#  Search phase as in insert, then one of four terminal shapes:
#    • leaf                → line 7
#    • only left / right   → line 8
#    • two children        → line 9, successor walk (line 9),
#                            final "replace & remove" on line 10
# ═════════════════════════════════════════════════════════════════

def generate_remove_steps(tree: Tree, value: Number) -> List[Step]:
    rec = StepRecorder()
    x = _f(value)

    if tree is None:
        rec.not_found(NO_NODE, "Tree is empty — nothing to remove.", 1)
        return rec.steps

    current = tree
    while current is not None:
        rec.visit(current.value)
        v = _f(current.value)

        if value < current.value:
            rec.record(current.value, f"{x} < {v}, go left.", 3)
            current = current.left
            continue
        if value > current.value:
            rec.record(current.value, f"{x} > {v}, go right.", 5)
            current = current.right
            continue

        # ── found the node to remove ──
        if current.is_leaf:
            rec.found(current.value, f"Found {v} — it's a leaf, simply delete it.", 7)
        elif current.left is None:
            rec.found(current.value,
                      f"Found {v} — has only right child "
                      f"({_f(current.right.value)}), bypass with right subtree.", 8)
        elif current.right is None:
            rec.found(current.value,
                      f"Found {v} — has only left child "
                      f"({_f(current.left.value)}), bypass with left subtree.", 8)
        else:
            rec.record(current.value,
                       f"Found {v} — has two children. Finding in-order successor…", 9)
            succ = current.right
            while succ.left is not None:
                rec.visit(succ.value)
                rec.record(succ.value,
                           f"Looking for successor: {_f(succ.value)} "
                           f"has left child, go left", 9)
                succ = succ.left
            rec.visit(succ.value)
            s = _f(succ.value)
            rec.found(succ.value,
                      f"Successor is {s}. Replace {v} with {s}, then remove {s}.", 10)
        return rec.steps

    rec.not_found(NO_NODE, f"Value {x} is not in the BST.", 1)
    return rec.steps


# ═════════════════════════════════════════════════════════════════
#  PREDECESSOR / SUCCESSOR
#
#  Nodes carry no parent pointers, so the search remembers the
#  last ancestor where the walk turned toward the answer side:
#    predecessor → last RIGHT turn   (ancestor smaller than v)
#    successor   → last LEFT turn    (ancestor greater than v)
#  If the found node has a subtree on that side, the answer is
#  that subtree's max (predecessor) / min (successor) instead.
# ═════════════════════════════════════════════════════════════════

def _neighbour_steps(tree: Tree, value: Number, predecessor: bool) -> List[Step]:
    rec = StepRecorder()
    x = _f(value)
    name = "Predecessor" if predecessor else "Successor"
    # The "inner" side holds the answer subtree; the walk marks an
    # ancestor whenever it turns toward the "outer" side.
    inner, outer = ("left", "right") if predecessor else ("right", "left")

    current = tree
    marked = None
    target = None
    while current is not None:
        rec.visit(current.value)
        v = _f(current.value)
        if current.value == value:
            target = current
            rec.record(current.value, f"Found node {x}.", 0)
            break
        turns_outer = (value > current.value) if predecessor else (value < current.value)
        sign = ">" if value > current.value else "<"
        if turns_outer:
            marked = current
            rec.record(current.value,
                       f"{x} {sign} {v}, go {outer} "
                       f"(mark as potential {name.lower()}).", 0)
            current = getattr(current, outer)
        else:
            rec.record(current.value, f"{x} {sign} {v}, go {inner}.", 0)
            current = getattr(current, inner)

    if target is None:
        rec.not_found(NO_NODE, f"Value {x} not found in tree.", 0)
        return rec.steps

    subtree = getattr(target, inner)
    if subtree is not None:
        extreme = "max" if predecessor else "min"
        rec.record(target.value,
                   f"Node has {inner} subtree — {name.lower()} is "
                   f"{extreme} of {inner} subtree.", 1)
        answer = subtree
        rec.visit(answer.value)
        while getattr(answer, outer) is not None:
            rec.record(answer.value, f"Go {outer} to find {extreme}...", 2)
            answer = getattr(answer, outer)
            rec.visit(answer.value)
        rec.found(answer.value, f"{name} of {x} is {_f(answer.value)}.", 4)
    elif marked is not None:
        rec.found(marked.value,
                  f"No {inner} subtree. {name} is last {outer}-turn "
                  f"ancestor: {_f(marked.value)}.", 3)
    else:
        rec.not_found(NO_NODE, f"No {name.lower()} exists for {x}.", 4)
    return rec.steps


def generate_predecessor_steps(tree: Tree, value: Number) -> List[Step]:
    return _neighbour_steps(tree, value, predecessor=True)


def generate_successor_steps(tree: Tree, value: Number) -> List[Step]:
    return _neighbour_steps(tree, value, predecessor=False)


# ═════════════════════════════════════════════════════════════════
#  SELECT (k-th smallest, 1-indexed)
# ═════════════════════════════════════════════════════════════════

def generate_select_steps(tree: Tree, k: Number) -> List[Step]:
    """
    Subtree-size guided descent to the k-th smallest value.

    The range check against the current tree happens before any
    walk step, so an out-of-range k yields exactly one step with
    an empty trail.
    """
    rec = StepRecorder()
    size = bst.count(tree)

    if k < 1:
        rec.not_found(NO_NODE, "k must be >= 1.", 0)
        return rec.steps
    if k > size:
        rec.not_found(NO_NODE,
                      f"k={_f(k)} is out of range (tree has {size} nodes).", 0)
        return rec.steps
    if not float(k).is_integer():
        rec.not_found(NO_NODE, f"k={_f(k)} must be a whole number.", 0)
        return rec.steps

    remaining = int(k)
    node = tree
    while node is not None:
        left_size = bst.count(node.left)
        rec.visit(node.value)
        prefix = f"k={remaining}, left subtree has {left_size} nodes"
        if remaining <= left_size:
            rec.record(node.value, f"{prefix} — go left.", 3)
            node = node.left
        elif remaining == left_size + 1:
            rec.found(node.value,
                      f"{prefix} — this is the {int(k)}-th smallest: "
                      f"{_f(node.value)}!", 5)
            return rec.steps
        else:
            remaining -= left_size + 1
            rec.record(node.value, f"{prefix} — go right with k={remaining}.", 6)
            node = node.right

    return rec.steps        # unreachable for 1 <= k <= size


# ═════════════════════════════════════════════════════════════════
#  TRAVERSALS
# ═════════════════════════════════════════════════════════════════

def _traversal_steps(nodes, visit_line: int) -> List[Step]:
    rec = StepRecorder()
    for node in nodes:
        rec.visit(node.value)
        rec.record(node.value, f"Visit {_f(node.value)}", visit_line)

    if rec.steps:
        rec.finish_last(" — traversal complete.", StepResult.FOUND)
    else:
        rec.not_found(NO_NODE, "Tree is empty.", 1)
    return rec.steps


def generate_inorder_steps(tree: Tree) -> List[Step]:
    return _traversal_steps(bst.iter_inorder(tree), 3)


def generate_preorder_steps(tree: Tree) -> List[Step]:
    return _traversal_steps(bst.iter_preorder(tree), 2)


def generate_postorder_steps(tree: Tree) -> List[Step]:
    return _traversal_steps(bst.iter_postorder(tree), 4)


# ═════════════════════════════════════════════════════════════════
#  DISPATCH & TRACE
# ═════════════════════════════════════════════════════════════════

GENERATORS: Dict[Operation, Callable[..., List[Step]]] = {
    Operation.SEARCH:      generate_search_steps,
    Operation.LOWER_BOUND: generate_lower_bound_steps,
    Operation.MIN:         generate_min_steps,
    Operation.MAX:         generate_max_steps,
    Operation.INSERT:      generate_insert_steps,
    Operation.REMOVE:      generate_remove_steps,
    Operation.PREDECESSOR: generate_predecessor_steps,
    Operation.SUCCESSOR:   generate_successor_steps,
    Operation.SELECT:      generate_select_steps,
    Operation.INORDER:     generate_inorder_steps,
    Operation.PREORDER:    generate_preorder_steps,
    Operation.POSTORDER:   generate_postorder_steps,
}

_LABELS = {
    Operation.SEARCH:      "Search",
    Operation.LOWER_BOUND: "LowerBound",
    Operation.MIN:         "FindMin",
    Operation.MAX:         "FindMax",
    Operation.INSERT:      "Insert",
    Operation.REMOVE:      "Remove",
    Operation.PREDECESSOR: "Predecessor",
    Operation.SUCCESSOR:   "Successor",
    Operation.SELECT:      "Select",
    Operation.INORDER:     "Inorder",
    Operation.PREORDER:    "Preorder",
    Operation.POSTORDER:   "Postorder",
}


def operation_label(operation: Operation, argument: Optional[Number] = None) -> str:
    """Title used by the info panel, e.g. "Search(37)" or "FindMin()"."""
    arg = _f(argument) if operation.takes_argument else ""
    return f"{_LABELS[operation]}({arg})"


def generate(operation: Operation, tree: Tree,
             argument: Optional[Number] = None) -> List[Step]:
    """
    Run the generator registered for ``operation``.

    Raises:
        TypeError: ``operation`` needs an argument and got None.
                   The input layer is expected to catch this earlier.
    """
    fn = GENERATORS[operation]
    if not operation.takes_argument:
        return fn(tree)
    if argument is None:
        raise TypeError(f"{operation.value} requires an argument")
    return fn(tree, argument)


@dataclass(frozen=True)
class Trace:
    """
    Everything a display layer needs to replay one operation.

    Attributes:
        operation   : Which algorithm ran.
        argument    : Its parameter (None for min/max/traversals).
        label       : Info-panel title, e.g. "Remove(25)".
        code        : Pseudocode listing indexed by Step.highlight_line.
        tree        : Snapshot the steps were generated against.
        steps       : The ordered step sequence.
        result_tree : Tree to show once playback ends (differs from
                      ``tree`` only for insert / remove).
    """

    operation: Operation
    argument: Optional[Number]
    label: str
    code: Tuple[str, ...]
    tree: Tree
    steps: Tuple[Step, ...]
    result_tree: Tree

    @property
    def final_step(self) -> Step:
        return self.steps[-1]

    @property
    def found(self) -> bool:
        return self.final_step.result is StepResult.FOUND

    def to_dict(self) -> dict:
        return {
            "operation": self.operation.value,
            "argument": self.argument,
            "label": self.label,
            "code": list(self.code),
            "tree": bst.snapshot(self.tree),
            "steps": [s.to_dict() for s in self.steps],
            "result_tree": bst.snapshot(self.result_tree),
        }


def build_trace(operation: Operation, tree: Tree,
                argument: Optional[Number] = None) -> Trace:
    """Generate the steps for ``operation`` and apply it if it mutates."""
    steps = generate(operation, tree, argument)

    result_tree = tree
    if operation is Operation.INSERT:
        result_tree = bst.insert(tree, argument)
    elif operation is Operation.REMOVE:
        result_tree = bst.remove(tree, argument)

    label = operation_label(operation, argument)
    logger.debug("%s: %d steps, result=%s", label, len(steps),
                 steps[-1].result.value)
    return Trace(
        operation=operation,
        argument=argument,
        label=label,
        code=PSEUDOCODE[operation],
        tree=tree,
        steps=tuple(steps),
        result_tree=result_tree,
    )
