"""
Persisted user preferences and colour themes.

Saved as JSON in the user's home directory so they survive across
sessions: theme, playback speed, per-colour overrides, accepted value
range and the operations-panel colour.
"""

import json
import logging
import math
import os
import random
from typing import Optional

from .samples import DEFAULT_VALUE_MAX, DEFAULT_VALUE_MIN

logger = logging.getLogger(__name__)

DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".bstviz.json")


# ═════════════════════════════════════════════════════════════════
#  THEME DEFINITIONS
#  Two Catppuccin-inspired palettes.  Each key maps to a hex colour
#  used by the renderer and the exporters.
# ═════════════════════════════════════════════════════════════════
THEMES = {
    # ── Dark theme (Catppuccin Mocha) ────────────────────────────
    "dark": {
        "BG": "#1e1e2e",           # Page background
        "FG": "#cdd6f4",           # Primary foreground text
        "ACCENT": "#89b4fa",       # Titles
        "CANVAS_BG": "#1e1e2e",    # Tree-drawing area
        "NODE_FILL": "#45475a",    # Idle node
        "NODE_TEXT": "#ffffff",    # Text inside nodes
        "EDGE": "#585b70",         # Lines connecting nodes
        "VISITED_FILL": "#fab387", # Nodes already on the trail
        "ACTIVE_RING": "#f9e2af",  # Node under examination
        "FOUND_FILL": "#a6e3a1",   # Final answer
        "STATUS_BG": "#313244",    # Status bar
        "PSEUDO_BG": "#181825",    # Pseudocode panel background
        "PSEUDO_FG": "#a6adc8",    # Pseudocode normal text
        "PSEUDO_HL": "#f9e2af",    # Pseudocode highlighted line
    },
    # ── Light theme (Catppuccin Latte) ───────────────────────────
    "light": {
        "BG": "#eff1f5",
        "FG": "#4c4f69",
        "ACCENT": "#1e66f5",
        "CANVAS_BG": "#e6e9ef",
        "NODE_FILL": "#8c8fa1",
        "NODE_TEXT": "#ffffff",
        "EDGE": "#8c8fa1",
        "VISITED_FILL": "#fe640b",
        "ACTIVE_RING": "#df8e1d",
        "FOUND_FILL": "#40a02b",
        "STATUS_BG": "#bcc0cc",
        "PSEUDO_BG": "#ccd0da",
        "PSEUDO_FG": "#4c4f69",
        "PSEUDO_HL": "#df8e1d",
    },
}

# Operations-panel accent colours; one is picked per session.
PANEL_COLORS = [
    "#32CD32",  # lime green
    "#FF69B4",  # pink
    "#FF8C00",  # orange
    "#FFD700",  # gold
    "#4169E1",  # royal blue
    "#FF6347",  # tomato
    "#00CED1",  # dark turquoise
    "#9370DB",  # medium purple
]


def choose_panel_color(rng: Optional[random.Random] = None) -> str:
    return (rng or random.Random()).choice(PANEL_COLORS)


# ─── Field converters for _load(); each raises TypeError/ValueError ──
def _as_theme(raw):
    if not isinstance(raw, str) or raw not in THEMES:
        raise ValueError(f"unknown theme {raw!r}")
    return raw


def _as_number(raw):
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TypeError(f"expected a number, got {raw!r}")
    if not math.isfinite(raw):
        raise ValueError(f"expected a finite number, got {raw!r}")
    return raw


def _as_count(raw):
    value = _as_number(raw)
    if value < 0:
        raise ValueError(f"expected a non-negative number, got {raw!r}")
    return int(value)


def _as_colors(raw):
    if not isinstance(raw, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw.items()):
        raise TypeError("expected an object of colour strings")
    return dict(raw)


class Settings:
    """
    Persistent user preferences manager.

    Attributes:
        theme         (str) : Active theme name ("dark" / "light").
        anim_speed    (int) : Milliseconds per playback step.
        custom_colors (dict): Key→hex overrides on top of the theme.
        value_min     (num) : Smallest key accepted by the input layer.
        value_max     (num) : Largest key accepted by the input layer.
        random_count  (int) : Default N for the random / skewed presets.
        panel_color   (str) : Operations-panel accent, fixed at start-up.

    The panel colour is passed in (or drawn from ``rng``) once, when
    the settings are created, and is never re-rolled afterwards.
    """

    def __init__(self, path: Optional[str] = None,
                 panel_color: Optional[str] = None,
                 rng: Optional[random.Random] = None,
                 load: bool = True):
        self.path          = path or DEFAULT_PATH
        self.theme         = "dark"
        self.anim_speed    = 1000
        self.custom_colors = {}
        self.value_min     = DEFAULT_VALUE_MIN
        self.value_max     = DEFAULT_VALUE_MAX
        self.random_count  = 18
        self.panel_color   = panel_color or choose_panel_color(rng)
        if load:
            self._load()

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read settings JSON; a missing or corrupt file keeps defaults."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path) as f:
                d = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable settings file %s: %s",
                           self.path, exc)
            return
        if not isinstance(d, dict):
            logger.warning("ignoring settings file %s: not a JSON object",
                           self.path)
            return

        self.theme         = self._field(d, "theme", _as_theme)
        self.anim_speed    = self._field(d, "anim_speed", _as_count)
        self.custom_colors = self._field(d, "custom_colors", _as_colors)
        self.value_min     = self._field(d, "value_min", _as_number)
        self.value_max     = self._field(d, "value_max", _as_number)
        self.random_count  = self._field(d, "random_count", _as_count)
        if self.value_min > self.value_max:
            logger.warning("ignoring value range [%s, %s] in %s: min > max",
                           self.value_min, self.value_max, self.path)
            self.value_min = DEFAULT_VALUE_MIN
            self.value_max = DEFAULT_VALUE_MAX

    def _field(self, d, key, convert):
        """Converted ``d[key]``, or the current value if absent or invalid."""
        if key not in d:
            return getattr(self, key)
        try:
            return convert(d[key])
        except (TypeError, ValueError) as exc:
            logger.warning("ignoring %s in %s: %s", key, self.path, exc)
            return getattr(self, key)

    # ── Save to disk ────────────────────────────────────────────
    def save(self):
        """Write settings JSON.  The panel colour is per-session and not saved."""
        with open(self.path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug("settings saved to %s", self.path)

    def to_dict(self) -> dict:
        return {"theme": self.theme,
                "anim_speed": self.anim_speed,
                "custom_colors": self.custom_colors,
                "value_min": self.value_min,
                "value_max": self.value_max,
                "random_count": self.random_count}

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key: str) -> str:
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key]  →  THEMES[theme][key]  →  "#ffffff"
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return THEMES[self.theme].get(key, "#ffffff")
