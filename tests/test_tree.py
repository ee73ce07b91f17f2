import sys
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bstviz.generators import build_trace
from bstviz.steps import Operation
from bstviz.tree import (
    EMPTY,
    Node,
    build_from_sequence,
    contains,
    count,
    height,
    inorder_values,
    insert,
    is_valid_bst,
    maximum,
    minimum,
    postorder_values,
    preorder_values,
    remove,
    snapshot,
    tree_stats,
)

SEVEN = [50, 25, 75, 12, 37, 62, 87]


class TestInsert(unittest.TestCase):
    def test_insert_into_empty_creates_single_node(self):
        t = insert(EMPTY, 5)
        self.assertEqual(t.value, 5)
        self.assertIsNone(t.left)
        self.assertIsNone(t.right)
        self.assertEqual(height(t), 0)

    def test_first_value_becomes_root(self):
        t = build_from_sequence(SEVEN)
        self.assertEqual(t.value, 50)
        self.assertEqual(t.left.value, 25)
        self.assertEqual(t.right.value, 75)
        self.assertEqual(inorder_values(t), sorted(SEVEN))

    def test_duplicate_returns_same_object(self):
        t = build_from_sequence(SEVEN)
        self.assertIs(insert(t, 37), t)

    def test_untouched_subtrees_are_shared(self):
        t = build_from_sequence(SEVEN)
        t2 = insert(t, 40)
        self.assertIsNot(t2, t)
        self.assertIs(t2.right, t.right)          # right half untouched
        self.assertIs(t2.left.left, t.left.left)  # 12 untouched
        self.assertEqual(inorder_values(t), sorted(SEVEN))
        self.assertEqual(inorder_values(t2), sorted(SEVEN + [40]))

    def test_floats_are_ordered_with_ints(self):
        t = build_from_sequence([10, 2.5, 11.75])
        self.assertEqual(inorder_values(t), [2.5, 10, 11.75])


class TestRemove(unittest.TestCase):
    def test_remove_from_empty_is_noop(self):
        self.assertIsNone(remove(EMPTY, 3))

    def test_remove_absent_value_keeps_tree(self):
        t = build_from_sequence(SEVEN)
        self.assertIs(remove(t, 99), t)

    def test_remove_leaf(self):
        t = remove(build_from_sequence(SEVEN), 12)
        self.assertIsNone(t.left.left)
        self.assertEqual(inorder_values(t), [25, 37, 50, 62, 75, 87])

    def test_remove_node_with_one_child_is_bypassed(self):
        t = build_from_sequence([50, 25, 12, 6])
        t2 = remove(t, 25)
        self.assertEqual(t2.left.value, 12)
        self.assertIs(t2.left, t.left.left)

    def test_remove_two_children_uses_successor(self):
        t = build_from_sequence(SEVEN)
        t2 = remove(t, 25)
        self.assertEqual(t2.left.value, 37)
        self.assertEqual(t2.left.left.value, 12)
        self.assertIsNone(t2.left.right)
        self.assertEqual(inorder_values(t2), [12, 37, 50, 62, 75, 87])
        # the input snapshot is unaffected
        self.assertEqual(inorder_values(t), sorted(SEVEN))

    def test_remove_root_with_deep_successor(self):
        t = build_from_sequence([50, 25, 75, 62, 87, 56, 68, 58])
        t2 = remove(t, 50)
        self.assertEqual(t2.value, 56)
        self.assertEqual(inorder_values(t2), [25, 56, 58, 62, 68, 75, 87])
        self.assertTrue(is_valid_bst(t2)[0])

    def test_remove_every_value_empties_tree(self):
        t = build_from_sequence(range(10))
        for i in range(10):
            t = remove(t, i)
        self.assertIsNone(t)


class TestQueries(unittest.TestCase):
    def test_count_and_height(self):
        self.assertEqual(count(EMPTY), 0)
        self.assertEqual(height(EMPTY), -1)
        t = build_from_sequence(SEVEN)
        self.assertEqual(count(t), 7)
        self.assertEqual(height(t), 2)

    def test_skewed_tree_needs_no_recursion(self):
        n = 5000
        t = build_from_sequence(range(n))
        self.assertEqual(count(t), n)
        self.assertEqual(height(t), n - 1)
        self.assertEqual(inorder_values(t)[-1], n - 1)
        self.assertEqual(postorder_values(t)[0], n - 1)
        self.assertTrue(is_valid_bst(t)[0])
        t = remove(t, 0)
        self.assertEqual(t.value, 1)

    def test_deep_node_repr_and_equality_are_shallow(self):
        t = build_from_sequence(range(3000))
        self.assertEqual(repr(t), "Node(0, left=None, right=1)")
        self.assertEqual(repr(Node(5)), "Node(5, left=None, right=None)")
        self.assertEqual(t, t)
        self.assertNotEqual(t, build_from_sequence(range(3000)))
        self.assertEqual(len({t, t.right}), 2)
        self.assertEqual(build_trace(Operation.MIN, t), build_trace(Operation.MIN, t))

    def test_traversal_orders(self):
        t = build_from_sequence(SEVEN)
        self.assertEqual(preorder_values(t), [50, 25, 12, 37, 75, 62, 87])
        self.assertEqual(postorder_values(t), [12, 37, 25, 62, 87, 75, 50])

    def test_min_max_contains(self):
        t = build_from_sequence(SEVEN)
        self.assertEqual(minimum(t).value, 12)
        self.assertEqual(maximum(t).value, 87)
        self.assertIsNone(minimum(EMPTY))
        self.assertTrue(contains(t, 62))
        self.assertFalse(contains(t, 63))

    def test_validator_reports_violations(self):
        bad = Node(10, Node(5, None, Node(12)), Node(20))
        ok, errors = is_valid_bst(bad)
        self.assertFalse(ok)
        self.assertEqual(len(errors), 1)
        self.assertIn("12", errors[0])

    def test_snapshot_and_stats(self):
        t = build_from_sequence([2, 1, 3])
        self.assertEqual(snapshot(t), {
            "value": 2,
            "left": {"value": 1, "left": None, "right": None},
            "right": {"value": 3, "left": None, "right": None},
        })
        self.assertIsNone(snapshot(EMPTY))
        self.assertEqual(tree_stats(t),
                         {"nodes": 3, "height": 1, "min": 1, "max": 3, "valid": True})
        self.assertEqual(tree_stats(EMPTY)["height"], -1)


if __name__ == "__main__":
    unittest.main()
