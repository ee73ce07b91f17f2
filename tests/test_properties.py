"""Property tests: random trees and operations must keep every invariant."""

import sys
from pathlib import Path
import unittest

from hypothesis import given, settings, strategies as st

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bstviz.generators import GENERATORS, generate
from bstviz.steps import Operation, StepResult
from bstviz.tree import (
    EMPTY,
    build_from_sequence,
    contains,
    count,
    inorder_values,
    insert,
    is_valid_bst,
    remove,
)

keys = st.integers(min_value=-500, max_value=500)
key_lists = st.lists(keys, max_size=40)


def apply(ops):
    tree = EMPTY
    model = set()
    for is_insert, v in ops:
        if is_insert:
            tree = insert(tree, v)
            model.add(v)
        else:
            tree = remove(tree, v)
            model.discard(v)
    return tree, model


class TestTreeProperties(unittest.TestCase):
    @given(st.lists(st.tuples(st.booleans(), keys), max_size=60))
    def test_matches_sorted_set_model(self, ops):
        tree, model = apply(ops)
        self.assertEqual(inorder_values(tree), sorted(model))
        self.assertEqual(count(tree), len(model))
        self.assertTrue(is_valid_bst(tree)[0])

    @given(key_lists, keys)
    def test_insert_is_idempotent(self, values, v):
        once = insert(build_from_sequence(values), v)
        self.assertIs(insert(once, v), once)

    @given(key_lists, keys)
    def test_insert_grows_count_only_for_new_values(self, values, v):
        tree = build_from_sequence(values)
        expected = count(tree) + (0 if contains(tree, v) else 1)
        self.assertEqual(count(insert(tree, v)), expected)

    @given(key_lists, keys)
    def test_insert_then_remove_restores_contents(self, values, v):
        tree = build_from_sequence(values)
        if contains(tree, v):
            return
        self.assertEqual(inorder_values(remove(insert(tree, v), v)),
                         inorder_values(tree))

    @given(key_lists, keys)
    def test_operations_never_touch_the_input(self, values, v):
        tree = build_from_sequence(values)
        before = inorder_values(tree)
        insert(tree, v)
        remove(tree, v)
        self.assertEqual(inorder_values(tree), before)


class TestStepProperties(unittest.TestCase):
    @settings(max_examples=60)
    @given(key_lists, keys, st.sampled_from(list(Operation)))
    def test_step_sequence_shape(self, values, v, operation):
        tree = build_from_sequence(values)
        steps = generate(operation, tree, v)

        self.assertGreaterEqual(len(steps), 1)
        # only the last step carries a result
        self.assertTrue(all(s.result is None for s in steps[:-1]))
        self.assertIn(steps[-1].result, (StepResult.FOUND, StepResult.NOT_FOUND))
        # the trail only grows
        for a, b in zip(steps, steps[1:]):
            self.assertEqual(b.visited[:len(a.visited)], a.visited)

        # deterministic
        self.assertEqual(generate(operation, tree, v), steps)

    @given(key_lists, keys)
    def test_search_agrees_with_contains(self, values, v):
        tree = build_from_sequence(values)
        steps = GENERATORS[Operation.SEARCH](tree, v)
        self.assertEqual(steps[-1].result is StepResult.FOUND, contains(tree, v))

    @given(key_lists, keys)
    def test_lower_bound_agrees_with_sorted_scan(self, values, v):
        tree = build_from_sequence(values)
        expected = next((x for x in sorted(set(values)) if x >= v), None)
        self.assertEqual(GENERATORS[Operation.LOWER_BOUND](tree, v)[-1].node_value,
                         expected)

    @given(st.lists(keys, min_size=1, max_size=40, unique=True), st.data())
    def test_neighbours_and_select_agree_with_sorted_order(self, values, data):
        tree = build_from_sequence(values)
        ordered = sorted(values)
        i = data.draw(st.integers(min_value=0, max_value=len(ordered) - 1))
        v = ordered[i]

        pred = GENERATORS[Operation.PREDECESSOR](tree, v)[-1].node_value
        succ = GENERATORS[Operation.SUCCESSOR](tree, v)[-1].node_value
        self.assertEqual(pred, ordered[i - 1] if i > 0 else None)
        self.assertEqual(succ, ordered[i + 1] if i + 1 < len(ordered) else None)
        self.assertEqual(GENERATORS[Operation.SELECT](tree, i + 1)[-1].node_value, v)

    @given(key_lists)
    def test_inorder_trail_is_sorted(self, values):
        tree = build_from_sequence(values)
        steps = GENERATORS[Operation.INORDER](tree)
        if tree is None:
            self.assertEqual(steps[-1].visited, ())
        else:
            self.assertEqual(list(steps[-1].visited), sorted(set(values)))


if __name__ == "__main__":
    unittest.main()
