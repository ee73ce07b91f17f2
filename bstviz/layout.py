"""
Layout: map tree nodes to 2-D positions.

x is the node's in-order index (so keys read left-to-right in sorted
order), y is its depth.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .tree import Node, Number, Tree

H_GAP = 70      # horizontal gap between consecutive in-order nodes
V_GAP = 70      # vertical gap between depth levels


@dataclass
class LayoutNode:
    value: Number
    x: float
    y: float
    children: List["LayoutNode"] = field(default_factory=list)


def _depths(tree: Tree) -> Dict[int, int]:
    depth = {}
    stack = [(tree, 0)] if tree is not None else []
    while stack:
        node, d = stack.pop()
        depth[id(node)] = d
        for child in (node.left, node.right):
            if child is not None:
                stack.append((child, d + 1))
    return depth


def _inorder_with_depth(tree: Tree) -> List[Tuple[Node, int]]:
    depth = _depths(tree)
    out = []
    stack = []
    current = tree
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.left
        current = stack.pop()
        out.append((current, depth[id(current)]))
        current = current.right
    return out


def compute_layout(tree: Tree) -> List[LayoutNode]:
    """
    Lay out the tree in pixel units.

    Returns:
        list[LayoutNode]: One entry per node, in in-order sequence.
        Each entry's ``children`` point at its left/right LayoutNodes.
    """
    ordered = _inorder_with_depth(tree)
    by_id = {}
    for idx, (node, d) in enumerate(ordered):
        by_id[id(node)] = LayoutNode(node.value, idx * H_GAP, d * V_GAP)
    for node, _ in ordered:
        parent = by_id[id(node)]
        for child in (node.left, node.right):
            if child is not None:
                parent.children.append(by_id[id(child)])
    return [by_id[id(node)] for node, _ in ordered]


def normalized_positions(tree: Tree) -> Dict[Number, Tuple[float, int]]:
    """
    Positions for raster rendering.

    Returns:
        dict: value → (x in [0, 1], depth).  A single node sits at 0.5.
    """
    ordered = _inorder_with_depth(tree)
    n = len(ordered)
    if n == 1:
        node, d = ordered[0]
        return {node.value: (0.5, d)}
    return {node.value: (i / (n - 1), d) for i, (node, d) in enumerate(ordered)}
