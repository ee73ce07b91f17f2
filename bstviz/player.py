"""
Playback cursor over a generated Trace.

The player only tracks *where* playback is; it owns no timers.  A
display layer calls next()/prev()/seek() itself, or hands play() a
sleep function to pace the steps.

Loading a new trace discards the previous one outright, so two step
sequences can never interleave.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .generators import Trace
from .steps import NO_NODE, Number, StepResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackView:
    """What the info panel and canvas show at the current position."""

    label: str
    code: Tuple[str, ...]
    status_text: str
    highlight_index: int
    visited: Tuple[Number, ...]
    active_node: Optional[Number]     # bright highlight
    found_node: Optional[Number]      # green highlight, final step only
    position: int                     # 0-based
    total: int
    finished: bool


class Player:
    """
    Step navigation for one trace at a time.

    Navigation methods:
        next()    → advance one step (no-op at the end)
        prev()    → go back one step (no-op at the start)
        reset()   → jump to the first step
        go_end()  → jump to the last step
        seek(i)   → jump to step i (clamped)
    """

    def __init__(self, trace: Optional[Trace] = None):
        self.trace = None
        self.current_step = 0
        self._generation = 0          # bumped on every load()
        if trace is not None:
            self.load(trace)

    # ── Loading ─────────────────────────────────────────────────
    def load(self, trace: Trace) -> None:
        """Replace whatever was loaded and rewind to step 0."""
        self.trace = trace
        self.current_step = 0
        self._generation += 1
        logger.debug("loaded %s (%d steps)", trace.label, len(trace.steps))

    @property
    def total(self) -> int:
        return len(self.trace.steps) if self.trace else 0

    @property
    def at_end(self) -> bool:
        return self.total == 0 or self.current_step >= self.total - 1

    # ── Navigation ──────────────────────────────────────────────
    def next(self) -> bool:
        """Advance one step.  Returns False when already at the end."""
        if self.at_end:
            return False
        self.current_step += 1
        return True

    def prev(self) -> bool:
        if self.current_step == 0:
            return False
        self.current_step -= 1
        return True

    def reset(self) -> None:
        self.current_step = 0

    def go_end(self) -> None:
        if self.total:
            self.current_step = self.total - 1

    def seek(self, index: int) -> None:
        if self.total:
            self.current_step = max(0, min(index, self.total - 1))

    # ── View ────────────────────────────────────────────────────
    def view(self) -> PlaybackView:
        """
        Snapshot of the display state at ``current_step``.

        Raises:
            RuntimeError: nothing has been loaded yet.
        """
        if self.trace is None:
            raise RuntimeError("no trace loaded")

        step = self.trace.steps[self.current_step]
        finished = self.at_end
        found = None
        if finished and step.result is StepResult.FOUND and step.node_value is not NO_NODE:
            found = step.node_value

        return PlaybackView(
            label=self.trace.label,
            code=self.trace.code,
            status_text=step.status_text,
            highlight_index=step.highlight_line,
            visited=step.visited,
            active_node=step.node_value,
            found_node=found,
            position=self.current_step,
            total=self.total,
            finished=finished,
        )

    # ── Paced playback ──────────────────────────────────────────
    def play(self, delay_ms: int,
             on_step: Callable[[PlaybackView], None],
             sleep: Callable[[float], None] = time.sleep) -> bool:
        """
        Show every remaining step, waiting ``delay_ms`` between them.

        ``on_step`` receives the view of each step, starting with the
        current one.  If ``on_step`` loads a different trace, playback
        of the old one stops immediately.

        Returns:
            bool: True if playback reached the end of its trace.
        """
        if self.trace is None:
            raise RuntimeError("no trace loaded")
        generation = self._generation
        on_step(self.view())
        while not self.at_end:
            sleep(max(0, delay_ms) / 1000.0)
            if generation != self._generation:
                return False
            self.next()
            on_step(self.view())
            if generation != self._generation:
                return False
        return True
