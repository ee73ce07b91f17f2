import sys
import tempfile
from pathlib import Path
import unittest

from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bstviz.errors import ExportError
from bstviz.export import PDFExporter, VideoExporter, export_png, render_step
from bstviz.generators import build_trace
from bstviz.render import TreeImageRenderer
from bstviz.settings import Settings
from bstviz.steps import Operation
from bstviz.tree import EMPTY, build_from_sequence

SEVEN = [50, 25, 75, 12, 37, 62, 87]


class ExportTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.settings = Settings(path=str(self.dir / "settings.json"),
                                 panel_color="#32CD32")
        self.tree = build_from_sequence(SEVEN)

    def tearDown(self):
        self.tmp.cleanup()


class TestRenderer(ExportTestCase):
    def test_render_size_and_background(self):
        trace = build_trace(Operation.SEARCH, self.tree, 37)
        img = TreeImageRenderer(self.settings, 640, 360).render(
            trace.tree, trace.steps[-1], trace.label, trace.code)
        self.assertEqual(img.size, (640, 360))
        self.assertEqual(img.mode, "RGB")

    def test_render_empty_tree(self):
        trace = build_trace(Operation.MIN, EMPTY)
        img = TreeImageRenderer(self.settings).render(EMPTY, trace.steps[0])
        self.assertEqual(img.size, (800, 500))

    def test_render_without_step(self):
        img = TreeImageRenderer(self.settings, 300, 200).render(self.tree)
        self.assertEqual(img.size, (300, 200))


class TestPNG(ExportTestCase):
    def test_last_step_by_default_index(self):
        out = self.dir / "remove.png"
        export_png(build_trace(Operation.REMOVE, self.tree, 25), -1, str(out),
                   self.settings)
        with Image.open(out) as img:
            self.assertEqual(img.size, (900, 500))

    def test_index_out_of_range(self):
        trace = build_trace(Operation.SEARCH, self.tree, 37)
        with self.assertRaises(ExportError):
            export_png(trace, 3, str(self.dir / "x.png"), self.settings)

    def test_unwritable_path(self):
        trace = build_trace(Operation.SEARCH, self.tree, 37)
        with self.assertRaises(ExportError):
            export_png(trace, 0, str(self.dir / "missing" / "x.png"), self.settings)


class TestPDF(ExportTestCase):
    def test_pdf_written(self):
        out = self.dir / "insert.pdf"
        PDFExporter(self.settings).export(
            build_trace(Operation.INSERT, self.tree, 40), str(out))
        self.assertTrue(out.read_bytes().startswith(b"%PDF"))


class TestVideoFrames(ExportTestCase):
    def test_one_frame_per_step(self):
        trace = build_trace(Operation.INORDER, self.tree)
        frames = list(VideoExporter(self.settings).frames(trace))
        self.assertEqual(len(frames), len(trace.steps))
        self.assertEqual(frames[0].shape, (720, 1280, 3))

    def test_hold_frames_follow_animation_speed(self):
        exporter = VideoExporter(self.settings)
        self.assertEqual(exporter.hold_frames(10), 10)
        self.settings.anim_speed = 50
        self.assertEqual(exporter.hold_frames(10), 1)


class RecordingRenderer:
    def __init__(self):
        self.trees = []

    def render(self, tree, step, title, code):
        self.trees.append(tree)


class TestFrameTree(ExportTestCase):
    def test_last_insert_frame_shows_the_new_node(self):
        trace = build_trace(Operation.INSERT, self.tree, 40)
        renderer = RecordingRenderer()
        render_step(trace, 0, renderer)
        render_step(trace, len(trace.steps) - 1, renderer)
        render_step(trace, -1, renderer)
        self.assertEqual(renderer.trees,
                         [trace.tree, trace.result_tree, trace.result_tree])

    def test_insert_into_empty_tree_draws_a_node(self):
        trace = build_trace(Operation.INSERT, EMPTY, 9)
        renderer = RecordingRenderer()
        render_step(trace, 0, renderer)
        self.assertEqual(renderer.trees[0].value, 9)

    def test_queries_always_use_the_snapshot(self):
        trace = build_trace(Operation.SEARCH, self.tree, 37)
        renderer = RecordingRenderer()
        render_step(trace, len(trace.steps) - 1, renderer)
        self.assertIs(renderer.trees[0], self.tree)


if __name__ == "__main__":
    unittest.main()
