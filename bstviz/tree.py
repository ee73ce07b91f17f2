"""
╔══════════════════════════════════════════════════════════════════╗
║                 bstviz — TREE STRUCTURE LAYER                    ║
║                                                                  ║
║  Persistent (immutable) binary search tree.                      ║
║                                                                  ║
║  • Nodes are frozen; nobody ever mutates a node in place.        ║
║  • insert()/remove() rebuild only the root → target path and     ║
║    share every untouched subtree by reference, so older tree     ║
║    snapshots stay valid after later operations.                  ║
║  • A tree handle is simply Optional[Node]; None is EMPTY.        ║
║  • Every walk is a loop or explicit stack: skewed trees of any   ║
║    size never hit the interpreter recursion limit.               ║
╚══════════════════════════════════════════════════════════════════╝
"""

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Tuple, Union

Number = Union[int, float]


# ═════════════════════════════════════════════════════════════════
#  NODE
#
#  value : Number        – the key (duplicates never stored)
#  left  : Node | None   – subtree of strictly smaller keys
#  right : Node | None   – subtree of strictly greater keys
#
#  No parent pointer: ancestors are found by re-walking from root.
# ═════════════════════════════════════════════════════════════════
@dataclass(frozen=True, eq=False, repr=False)
class Node:
    """
    One key of the tree.  Frozen: structural changes build new nodes.

    Equality is identity and repr shows only the direct children, so
    neither recurses through a deep subtree.  Compare contents with
    inorder_values() or snapshot().
    """

    value: Number
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    def __repr__(self) -> str:
        left = self.left.value if self.left is not None else None
        right = self.right.value if self.right is not None else None
        return f"Node({self.value!r}, left={left!r}, right={right!r})"

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


Tree = Optional[Node]
EMPTY: Tree = None


# ═════════════════════════════════════════════════════════════════
#  STRUCTURAL OPERATIONS
# ═════════════════════════════════════════════════════════════════

def _rebuild(path: List[Tuple[Node, bool]], subtree: Tree) -> Tree:
    """
    Re-create the ancestors on ``path`` (root first) on top of ``subtree``.

    Args:
        path    : (ancestor, went_left) pairs from the root downward.
        subtree : New subtree that replaces the last child followed.

    Returns:
        The new root.  Siblings off the path are reused as-is.
    """
    for parent, went_left in reversed(path):
        if went_left:
            subtree = replace(parent, left=subtree)
        else:
            subtree = replace(parent, right=subtree)
    return subtree


def insert(tree: Tree, value: Number) -> Tree:
    """
    Insert ``value`` and return the new tree.

    Duplicates are silently ignored: the very same ``tree`` object
    is returned.

    Args:
        tree  : Tree snapshot (left untouched).
        value : Key to add.

    Returns:
        Tree: New root sharing all untouched subtrees with ``tree``.
    """
    path = []
    current = tree
    while current is not None:
        if value < current.value:
            path.append((current, True))
            current = current.left
        elif value > current.value:
            path.append((current, False))
            current = current.right
        else:
            return tree                      # duplicate → unchanged
    return _rebuild(path, Node(value))


def remove(tree: Tree, value: Number) -> Tree:
    """
    Remove ``value`` and return the new tree.

    Deletion cases once the node is located:
        • leaf          → dropped
        • one child     → replaced by that child
        • two children  → takes the in-order successor's value
                          (minimum of the right subtree), and the
                          successor is removed from the right subtree

    A missing value (or an empty tree) is a no-op, not an error.
    """
    path = []
    current = tree
    while current is not None and current.value != value:
        if value < current.value:
            path.append((current, True))
            current = current.left
        else:
            path.append((current, False))
            current = current.right

    if current is None:
        return tree

    if current.left is None:
        replacement = current.right
    elif current.right is None:
        replacement = current.left
    else:
        successor = minimum(current.right)
        replacement = Node(successor.value, current.left,
                           remove(current.right, successor.value))
    return _rebuild(path, replacement)


def build_from_sequence(values: Iterable[Number]) -> Tree:
    """Left fold of insert() over ``values``; the first value becomes root."""
    tree = EMPTY
    for v in values:
        tree = insert(tree, v)
    return tree


# ═════════════════════════════════════════════════════════════════
#  QUERIES
# ═════════════════════════════════════════════════════════════════

def count(tree: Tree) -> int:
    """Number of nodes (0 for the empty tree)."""
    total = 0
    stack = [tree] if tree is not None else []
    while stack:
        node = stack.pop()
        total += 1
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    return total


def height(tree: Tree) -> int:
    """
    Height in edges: -1 for the empty tree, 0 for a single node.

    Computed level by level so deep trees need no recursion.
    """
    h = -1
    level = [tree] if tree is not None else []
    while level:
        h += 1
        level = [child for node in level
                 for child in (node.left, node.right) if child is not None]
    return h


def contains(tree: Tree, value: Number) -> bool:
    current = tree
    while current is not None:
        if value == current.value:
            return True
        current = current.left if value < current.value else current.right
    return False


def minimum(tree: Tree) -> Optional[Node]:
    """Leftmost node, or None for the empty tree."""
    if tree is None:
        return None
    while tree.left is not None:
        tree = tree.left
    return tree


def maximum(tree: Tree) -> Optional[Node]:
    """Rightmost node, or None for the empty tree."""
    if tree is None:
        return None
    while tree.right is not None:
        tree = tree.right
    return tree


# ─────────────────────────────────────────────────────────────────
#  TRAVERSALS (explicit stacks)
# ─────────────────────────────────────────────────────────────────

def iter_inorder(tree: Tree) -> Iterator[Node]:
    stack = []
    current = tree
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.left
        current = stack.pop()
        yield current
        current = current.right


def iter_preorder(tree: Tree) -> Iterator[Node]:
    stack = [tree] if tree is not None else []
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:           # pushed first → popped last
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def iter_postorder(tree: Tree) -> Iterator[Node]:
    stack = []
    last = None
    current = tree
    while stack or current is not None:
        if current is not None:
            stack.append(current)
            current = current.left
            continue
        top = stack[-1]
        if top.right is not None and top.right is not last:
            current = top.right
        else:
            yield top
            last = stack.pop()


def inorder_values(tree: Tree) -> List[Number]:
    return [n.value for n in iter_inorder(tree)]


def preorder_values(tree: Tree) -> List[Number]:
    return [n.value for n in iter_preorder(tree)]


def postorder_values(tree: Tree) -> List[Number]:
    return [n.value for n in iter_postorder(tree)]


# ═════════════════════════════════════════════════════════════════
#  VALIDATION, SNAPSHOT & STATS
# ═════════════════════════════════════════════════════════════════

def is_valid_bst(tree: Tree) -> Tuple[bool, List[str]]:
    """
    Check the ordering invariant on every node.

    Each node's value must satisfy  low < value < high, where the
    bounds are inherited from its ancestors.

    Returns:
        tuple[bool, list[str]]: (is_valid, violation messages).
    """
    errors = []
    stack = [(tree, float("-inf"), float("inf"))] if tree is not None else []
    while stack:
        node, low, high = stack.pop()
        if node.value <= low:
            errors.append(f"BST violation: node {node.value} <= {low}")
        if node.value >= high:
            errors.append(f"BST violation: node {node.value} >= {high}")
        if node.left is not None:
            stack.append((node.left, low, node.value))
        if node.right is not None:
            stack.append((node.right, node.value, high))
    return not errors, errors


def snapshot(tree: Tree) -> Optional[dict]:
    """
    Serialise a tree into nested dicts, e.g. for JSON output.

    Returns:
        dict|None: {"value": v, "left": dict|None, "right": dict|None}
    """
    if tree is None:
        return None
    built = {}                               # id(node) → dict, children first
    for node in iter_postorder(tree):
        built[id(node)] = {
            "value": node.value,
            "left":  built.pop(id(node.left)) if node.left is not None else None,
            "right": built.pop(id(node.right)) if node.right is not None else None,
        }
    return built[id(tree)]


def tree_stats(tree: Tree) -> dict:
    """Summary numbers shown next to the canvas (nodes, height, min, max, valid)."""
    lo, hi = minimum(tree), maximum(tree)
    ok, _ = is_valid_bst(tree)
    return {
        "nodes":  count(tree),
        "height": height(tree),
        "min":    lo.value if lo is not None else None,
        "max":    hi.value if hi is not None else None,
        "valid":  ok,
    }
