"""
Pseudocode listings shown beside the animation.

Each listing is a fixed tuple of lines.  A Step's ``highlight_line``
is a 0-based index into the listing of the operation that produced
it, so the display layer can light up the line being executed.
"""

from .steps import Operation

# ═════════════════════════════════════════════════════════════════
#  SEARCH FAMILY
# ═════════════════════════════════════════════════════════════════

SEARCH_CODE = (
    "if this == null",                    # 0
    "    return null",                    # 1  not found
    "else if this.key == search value",   # 2
    "    return this",                    # 3  found
    "else if this.key < search value",    # 4
    "    search right",                   # 5
    "else search left",                   # 6
)

LOWER_BOUND_CODE = (
    "result = null",
    "if this == null",
    "    return result",                  # 2  terminal
    "else if this.key >= search value",
    "    result = this.key",
    "    search left (try smaller)",      # 5
    "else search right",                  # 6
)

# Shared by min and max; "target child" is left for min, right for max.
MIN_MAX_CODE = (
    "if this == null",
    "    return null",                    # 1  empty tree
    "else if target child == null",
    "    return this",                    # 3  extreme found
    "else go to target child",            # 4
)

# ═════════════════════════════════════════════════════════════════
#  MUTATIONS
# ═════════════════════════════════════════════════════════════════

INSERT_CODE = (
    "if this == null",
    "    create new node",                # 1
    "else if value < this.key",
    "    insert to left subtree",         # 3
    "else if value > this.key",
    "    insert to right subtree",        # 5
    "else duplicate — ignore",            # 6
)

REMOVE_CODE = (
    "if this == null",
    "    value not found",                # 1
    "else if value < this.key",
    "    search left subtree",            # 3
    "else if value > this.key",
    "    search right subtree",           # 5
    "else (found node to remove)",
    "    if leaf: just remove",           # 7
    "    if one child: bypass",           # 8
    "    if two children: find successor",       # 9
    "    replace with successor & remove it",    # 10
)

# ═════════════════════════════════════════════════════════════════
#  ORDER QUERIES
# ═════════════════════════════════════════════════════════════════

PREDECESSOR_CODE = (
    "search for node with value v",
    "if node has left subtree",
    "    predecessor = max of left subtree",
    "else predecessor = last right-turn ancestor",
    "return predecessor",
)

SUCCESSOR_CODE = (
    "search for node with value v",
    "if node has right subtree",
    "    successor = min of right subtree",
    "else successor = last left-turn ancestor",
    "return successor",
)

SELECT_CODE = (
    "function select(node, k)",
    "    leftSize = size(node.left)",
    "    if k <= leftSize",
    "        return select(node.left, k)",
    "    else if k == leftSize + 1",
    "        return node  // found k-th",
    "    else select(node.right, k-leftSize-1)",
)

# ═════════════════════════════════════════════════════════════════
#  TRAVERSALS
# ═════════════════════════════════════════════════════════════════

INORDER_CODE = (
    "function inorder(node)",
    "    if node == null: return",
    "    inorder(node.left)",
    "    visit(node)",                    # 3
    "    inorder(node.right)",
)

PREORDER_CODE = (
    "function preorder(node)",
    "    if node == null: return",
    "    visit(node)",                    # 2
    "    preorder(node.left)",
    "    preorder(node.right)",
)

POSTORDER_CODE = (
    "function postorder(node)",
    "    if node == null: return",
    "    postorder(node.left)",
    "    postorder(node.right)",
    "    visit(node)",                    # 4
)


PSEUDOCODE = {
    Operation.SEARCH:      SEARCH_CODE,
    Operation.LOWER_BOUND: LOWER_BOUND_CODE,
    Operation.MIN:         MIN_MAX_CODE,
    Operation.MAX:         MIN_MAX_CODE,
    Operation.INSERT:      INSERT_CODE,
    Operation.REMOVE:      REMOVE_CODE,
    Operation.PREDECESSOR: PREDECESSOR_CODE,
    Operation.SUCCESSOR:   SUCCESSOR_CODE,
    Operation.SELECT:      SELECT_CODE,
    Operation.INORDER:     INORDER_CODE,
    Operation.PREORDER:    PREORDER_CODE,
    Operation.POSTORDER:   POSTORDER_CODE,
}
