"""
Off-screen tree renderer (Pillow).

Draws a tree snapshot with the highlights of one Step, used by all
three exporters:
    • PNG   — single frame
    • PDF   — one frame per page
    • Video — sequence of frames

Layout of a frame: title at top, tree on the left, pseudocode panel
on the right (when a listing is given), status bar at the bottom.
"""

from typing import Optional, Sequence

from PIL import Image, ImageDraw, ImageFont

from .layout import normalized_positions
from .steps import NO_NODE, Step, StepResult, format_value
from .tree import Tree, height as tree_height

FONT_CANDIDATES = [
    "consola.ttf",                                          # Windows
    "Consolas.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",  # Debian/Ubuntu
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",              # Arch
    "/System/Library/Fonts/Menlo.ttc",                      # macOS
]


class TreeImageRenderer:
    """
    Render a tree plus one step's highlights to a Pillow Image.

    Node colouring:
        • idle          → NODE_FILL
        • on the trail  → VISITED_FILL
        • current node  → ACTIVE_RING outline (thick)
        • final answer  → FOUND_FILL

    Args:
        settings (Settings): For colour lookups.
        width    (int)     : Image width in pixels.
        height   (int)     : Image height in pixels.
    """

    def __init__(self, settings, width=800, height=500):
        self.settings    = settings
        self.width       = width
        self.height      = height
        self.node_radius = 20
        self.padding     = 40
        self.code_width  = 300          # pseudocode panel width
        self._fonts      = None

    # ── Font loading ────────────────────────────────────────────
    def fonts(self):
        """
        Load monospace fonts once: (normal 14pt, small 11pt, title 16pt).

        Falls back to Pillow's bundled scalable font if no candidate
        exists (status texts contain non-Latin-1 characters such as "—").
        """
        if self._fonts is not None:
            return self._fonts
        for p in FONT_CANDIDATES:
            try:
                self._fonts = (ImageFont.truetype(p, 14),
                               ImageFont.truetype(p, 11),
                               ImageFont.truetype(p, 16))
                break
            except OSError:
                continue
        if self._fonts is None:
            self._fonts = (ImageFont.load_default(size=14),
                           ImageFont.load_default(size=11),
                           ImageFont.load_default(size=16))
        return self._fonts

    # ── Main render method ──────────────────────────────────────
    def render(self, tree: Tree, step: Optional[Step] = None, title: str = "",
               code: Optional[Sequence[str]] = None) -> Image.Image:
        """
        Render ``tree`` as it looks at ``step``.

        Args:
            tree  : Tree snapshot.
            step  : Step whose trail / active node / result to show.
            title : Drawn at the top.
            code  : Pseudocode listing; step.highlight_line is lit.

        Returns:
            Image: RGB image of size (width, height).
        """
        s = self.settings
        font, font_s, font_t = self.fonts()

        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)

        tree_right = self.width
        if code:
            tree_right = self.width - self.code_width
            self._draw_code(draw, code, step, tree_right, font_s)

        if title:
            draw.text((10, 8), title, fill=s.get("ACCENT"), font=font_t)

        # ── Status bar ──
        status_h = 0
        if step is not None:
            status_h = 30
            y0 = self.height - status_h
            draw.rectangle([0, y0, tree_right, self.height], fill=s.get("STATUS_BG"))
            draw.text((10, y0 + 8), step.status_text[:110],
                      fill=s.get("FG"), font=font_s)

        if tree is None:
            draw.text((tree_right // 2 - 40, self.height // 2),
                      "Empty Tree", fill=s.get("FG"), font=font)
            return img

        # ── Highlight sets ──
        visited = set(step.visited) if step else set()
        active  = step.node_value if step else NO_NODE
        found   = NO_NODE
        if step is not None and step.result is StepResult.FOUND:
            found = step.node_value

        # ── Normalised → pixel coordinates ──
        positions = normalized_positions(tree)
        depth = max(tree_height(tree), 1)
        pad = self.padding
        top, bottom = 50, self.height - status_h - pad

        def cx(x): return int(pad + x * (tree_right - 2 * pad))
        def cy(d): return int(top + d * (bottom - top) / depth)

        # ── Edges first, nodes on top ──
        stack = [tree]
        nodes = []
        while stack:
            node = stack.pop()
            nodes.append(node)
            x, d = positions[node.value]
            for child in (node.left, node.right):
                if child is not None:
                    c_x, c_d = positions[child.value]
                    draw.line([(cx(x), cy(d)), (cx(c_x), cy(c_d))],
                              fill=s.get("EDGE"), width=2)
                    stack.append(child)

        r = self.node_radius
        for node in nodes:
            x, d = positions[node.value]
            px, py = cx(x), cy(d)
            key = node.value
            if key == found:
                fill = s.get("FOUND_FILL")
            elif key in visited:
                fill = s.get("VISITED_FILL")
            else:
                fill = s.get("NODE_FILL")
            is_active = key == active
            outline = s.get("ACTIVE_RING") if is_active else s.get("EDGE")
            draw.ellipse([px - r, py - r, px + r, py + r], fill=fill,
                         outline=outline, width=4 if is_active else 1)

            txt = format_value(key)
            bb  = draw.textbbox((0, 0), txt, font=font)
            tw, th = bb[2] - bb[0], bb[3] - bb[1]
            draw.text((px - tw // 2, py - th // 2), txt,
                      fill=s.get("NODE_TEXT"), font=font)

        return img

    def _draw_code(self, draw, code, step, left, font):
        s = self.settings
        draw.rectangle([left, 0, self.width, self.height], fill=s.get("PSEUDO_BG"))
        hl = step.highlight_line if step is not None else -1
        for i, line in enumerate(code):
            y = 40 + i * 18
            if i == hl:
                draw.rectangle([left + 4, y - 2, self.width - 4, y + 15],
                               fill=s.get("PSEUDO_HL"))
                color = s.get("PSEUDO_BG")
            else:
                color = s.get("PSEUDO_FG")
            draw.text((left + 10, y), line[:40], fill=color, font=font)
