import sys
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bstviz.generators import build_trace
from bstviz.layout import H_GAP, V_GAP, compute_layout, normalized_positions
from bstviz.player import Player
from bstviz.steps import Operation
from bstviz.tree import EMPTY, build_from_sequence

SEVEN = [50, 25, 75, 12, 37, 62, 87]


class TestLayout(unittest.TestCase):
    def test_x_follows_inorder_and_y_follows_depth(self):
        nodes = compute_layout(build_from_sequence(SEVEN))
        self.assertEqual([n.value for n in nodes], sorted(SEVEN))
        self.assertEqual([n.x for n in nodes], [i * H_GAP for i in range(7)])
        by_value = {n.value: n for n in nodes}
        self.assertEqual(by_value[50].y, 0)
        self.assertEqual(by_value[25].y, V_GAP)
        self.assertEqual(by_value[87].y, 2 * V_GAP)
        self.assertEqual([c.value for c in by_value[25].children], [12, 37])
        self.assertEqual(by_value[12].children, [])

    def test_empty_tree(self):
        self.assertEqual(compute_layout(EMPTY), [])
        self.assertEqual(normalized_positions(EMPTY), {})

    def test_normalized_positions(self):
        pos = normalized_positions(build_from_sequence([2, 1, 3]))
        self.assertEqual(pos, {1: (0.0, 1), 2: (0.5, 0), 3: (1.0, 1)})
        self.assertEqual(normalized_positions(build_from_sequence([9])), {9: (0.5, 0)})


class TestPlayer(unittest.TestCase):
    def setUp(self):
        self.tree = build_from_sequence(SEVEN)
        self.trace = build_trace(Operation.SEARCH, self.tree, 37)

    def test_navigation_is_clamped(self):
        p = Player(self.trace)
        self.assertEqual(p.total, 3)
        self.assertFalse(p.prev())
        self.assertTrue(p.next())
        self.assertTrue(p.next())
        self.assertFalse(p.next())
        self.assertTrue(p.at_end)
        p.seek(-5)
        self.assertEqual(p.current_step, 0)
        p.seek(99)
        self.assertEqual(p.current_step, 2)
        p.reset()
        self.assertEqual(p.current_step, 0)
        p.go_end()
        self.assertEqual(p.current_step, 2)

    def test_view_marks_found_only_at_the_end(self):
        p = Player(self.trace)
        first = p.view()
        self.assertEqual(first.label, "Search(37)")
        self.assertEqual(first.active_node, 50)
        self.assertEqual(first.highlight_index, 6)
        self.assertIsNone(first.found_node)
        self.assertFalse(first.finished)

        p.go_end()
        last = p.view()
        self.assertEqual(last.found_node, 37)
        self.assertEqual(last.visited, (50, 25, 37))
        self.assertTrue(last.finished)

    def test_not_found_has_no_found_node(self):
        p = Player(build_trace(Operation.SEARCH, self.tree, 40))
        p.go_end()
        view = p.view()
        self.assertIsNone(view.found_node)
        self.assertIsNone(view.active_node)

    def test_view_without_trace(self):
        with self.assertRaises(RuntimeError):
            Player().view()

    def test_play_paces_with_sleep(self):
        seen, sleeps = [], []
        finished = Player(self.trace).play(250, lambda v: seen.append(v.position),
                                           sleep=sleeps.append)
        self.assertTrue(finished)
        self.assertEqual(seen, [0, 1, 2])
        self.assertEqual(sleeps, [0.25, 0.25])

    def test_loading_new_trace_stops_old_playback(self):
        other = build_trace(Operation.MIN, self.tree)
        p = Player(self.trace)
        seen = []

        def on_step(view):
            seen.append(view.label)
            if len(seen) == 2:
                p.load(other)

        self.assertFalse(p.play(0, on_step, sleep=lambda s: None))
        self.assertEqual(seen, ["Search(37)", "Search(37)"])
        self.assertIs(p.trace, other)
        self.assertEqual(p.current_step, 0)


if __name__ == "__main__":
    unittest.main()
