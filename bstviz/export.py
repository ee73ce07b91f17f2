"""
Exporters for a whole Trace.

    • export_png()     — one step as a PNG image (Pillow)
    • PDFExporter      — title page, one page per step, summary page
                         (reportlab + Pillow)
    • VideoExporter    — MP4 with one held frame per step
                         (OpenCV if installed, otherwise imageio)

All failures surface as ExportError.
"""

import logging
import os
import shutil
import tempfile
from datetime import datetime

import imageio
import numpy as np
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas as pdf_canvas

from .errors import ExportError
from .render import TreeImageRenderer
from .tree import inorder_values, tree_stats

logger = logging.getLogger(__name__)

# ─── OpenCV: preferred MP4 writer (the "video" extra) ───────────
try:
    import cv2
    HAS_CV2 = True
except ImportError:
    HAS_CV2 = False


def _frame_title(trace, index):
    return f"{trace.label}  —  step {index + 1}/{len(trace.steps)}"


def render_step(trace, index, renderer):
    """
    Render step ``index`` of ``trace``.

    Steps are drawn on the pre-operation snapshot, except the last step
    of an insert/remove, which shows the resulting tree.
    """
    index %= len(trace.steps)
    tree = trace.tree
    if trace.operation.mutates and index == len(trace.steps) - 1:
        tree = trace.result_tree
    return renderer.render(tree, trace.steps[index],
                           _frame_title(trace, index), trace.code)


# ═════════════════════════════════════════════════════════════════
#  PNG
# ═════════════════════════════════════════════════════════════════

def export_png(trace, index, filename, settings, width=900, height=500):
    """
    Save one step as a PNG.

    Args:
        trace    (Trace)   : Generated trace.
        index    (int)     : Step index; negative counts from the end.
        filename (str)     : Output path.
        settings (Settings): Colours.
    """
    if not -len(trace.steps) <= index < len(trace.steps):
        raise ExportError(f"step {index} out of range (trace has "
                          f"{len(trace.steps)} steps)")
    index %= len(trace.steps)
    img = render_step(trace, index, TreeImageRenderer(settings, width, height))
    try:
        img.save(filename, format="PNG")
    except (OSError, ValueError) as exc:
        raise ExportError(f"cannot write {filename}: {exc}") from exc
    logger.info("wrote %s", filename)


# ═════════════════════════════════════════════════════════════════
#  PDF EXPORTER
# ═════════════════════════════════════════════════════════════════
class PDFExporter:
    """
    Export a trace as a landscape-A4 PDF walkthrough.

    Each step becomes one page with a rendered frame, the status
    text and the highlighted pseudocode line.  A summary page with
    the outcome and before/after tree statistics closes the document.
    """

    def __init__(self, settings):
        self.settings = settings
        self.renderer = TreeImageRenderer(settings, 900, 450)

    def export(self, trace, filename):
        """
        Workflow:
            1. Title page
            2. For each step: render → temp PNG → embed in page
            3. Summary page
            4. Remove the temp directory

        Raises:
            ExportError: reportlab/Pillow failed or the file can't be written.
        """
        steps = trace.steps
        tmp = tempfile.mkdtemp(prefix="bstviz-")
        try:
            pw, ph = landscape(A4)
            c = pdf_canvas.Canvas(filename, pagesize=landscape(A4))

            # ── Title page ──
            c.setFont("Helvetica-Bold", 28)
            c.drawCentredString(pw / 2, ph - 100, "Binary Search Tree Walkthrough")
            c.setFont("Helvetica", 18)
            c.drawCentredString(pw / 2, ph - 140, trace.label)
            c.setFont("Helvetica", 12)
            c.drawCentredString(pw / 2, ph - 180,
                f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
            c.drawCentredString(pw / 2, ph - 200, f"Total Steps: {len(steps)}")
            c.showPage()

            # ── One page per step ──
            for i, st in enumerate(steps):
                ip = os.path.join(tmp, f"s{i:04d}.png")
                render_step(trace, i, self.renderer).save(ip)

                c.setFont("Helvetica-Bold", 14)
                c.drawString(30, ph - 30, f"Step {i + 1} of {len(steps)}")
                c.drawImage(ip, 30, ph - 480, width=760, height=380,
                            preserveAspectRatio=True)
                c.setFont("Helvetica", 12)
                c.drawString(30, ph - 505, f"Status: {st.status_text}")
                line = trace.code[st.highlight_line].strip()
                c.setFont("Helvetica-Oblique", 11)
                c.drawString(30, ph - 525,
                             f"Pseudocode line {st.highlight_line}: {line}")
                if st.result is not None:
                    c.setFont("Helvetica-Bold", 11)
                    c.drawString(30, ph - 545, f"Result: {st.result.value}")
                c.showPage()

            # ── Summary page ──
            before, after = tree_stats(trace.tree), tree_stats(trace.result_tree)
            c.setFont("Helvetica-Bold", 20)
            c.drawCentredString(pw / 2, ph - 100, "Summary")
            c.setFont("Helvetica", 12)
            y = ph - 150
            for line in [f"Operation: {trace.label}",
                         f"Total Steps: {len(steps)}",
                         f"Nodes visited: {len(trace.final_step.visited)}",
                         f"Result: {trace.final_step.result.value}",
                         f"Nodes before / after: {before['nodes']} / {after['nodes']}",
                         f"Height before / after: {before['height']} / {after['height']}",
                         f"In-order after: {inorder_values(trace.result_tree)}"]:
                c.drawString(100, y, line[:120])
                y -= 22
            c.showPage()
            c.save()
        except (OSError, ValueError) as exc:
            raise ExportError(f"PDF export failed: {exc}") from exc
        finally:
            shutil.rmtree(tmp, ignore_errors=True)
        logger.info("wrote %s (%d pages)", filename, len(steps) + 2)


# ═════════════════════════════════════════════════════════════════
#  VIDEO EXPORTER
#
#  Two backends, tried in order:
#    1. OpenCV  (cv2.VideoWriter)
#    2. imageio (imageio.mimwrite, needs the ffmpeg plugin for MP4)
# ═════════════════════════════════════════════════════════════════
class VideoExporter:
    """
    Export a trace as an MP4 video.

    Each step is rendered at 1280×720 and held for ``hold`` frames so
    the playback speed matches the animation speed setting.
    """

    WIDTH, HEIGHT = 1280, 720

    def __init__(self, settings):
        self.settings = settings
        self.renderer = TreeImageRenderer(settings, self.WIDTH, self.HEIGHT)

    def frames(self, trace):
        """Yield one RGB numpy array per step."""
        for i in range(len(trace.steps)):
            yield np.array(render_step(trace, i, self.renderer))

    def hold_frames(self, fps):
        """Frames per step so one step lasts ``anim_speed`` milliseconds."""
        return max(1, round(fps * self.settings.anim_speed / 1000))

    def export(self, trace, filename, fps=10):
        if HAS_CV2:
            return self.export_cv2(trace, filename, fps)
        return self.export_imageio(trace, filename, fps)

    # ── Backend 1: OpenCV ────────────────────────────────────────
    def export_cv2(self, trace, filename, fps=10):
        hold = self.hold_frames(fps)
        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        out = cv2.VideoWriter(filename, fourcc, fps, (self.WIDTH, self.HEIGHT))
        if not out.isOpened():
            raise ExportError(f"OpenCV cannot open {filename} for writing")
        try:
            for arr in self.frames(trace):
                bgr = cv2.cvtColor(arr, cv2.COLOR_RGB2BGR)     # RGB → BGR
                for _ in range(hold):
                    out.write(bgr)
        finally:
            out.release()
        logger.info("wrote %s with OpenCV", filename)

    # ── Backend 2: imageio ───────────────────────────────────────
    def export_imageio(self, trace, filename, fps=10):
        hold = self.hold_frames(fps)
        frames = [arr for arr in self.frames(trace) for _ in range(hold)]
        try:
            imageio.mimwrite(filename, frames, fps=fps)
        except (OSError, ValueError, RuntimeError) as exc:
            raise ExportError(f"video export failed: {exc}") from exc
        logger.info("wrote %s with imageio", filename)
