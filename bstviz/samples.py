"""
Tree presets ("Create" menu) and user input parsing.

Parsing is the gate in front of the core: anything that is not a
finite number inside the configured range is rejected here with an
InputError, so the generators only ever see valid keys.
"""

import logging
import math
import random
from typing import List, Optional, Union

from .errors import InputError
from .tree import Tree, EMPTY, build_from_sequence

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Demo tree: a perfect 15-node tree of depth 3.
SAMPLE_BST_VALUES = [
    50, 25, 75, 12, 37, 62, 87, 6, 18, 30, 43, 56, 68, 81, 93,
]

DEFAULT_VALUE_MIN = -9999
DEFAULT_VALUE_MAX = 9999
RANDOM_MIN = 1
RANDOM_MAX = 99


# ═════════════════════════════════════════════════════════════════
#  PRESETS
# ═════════════════════════════════════════════════════════════════

def empty_tree() -> Tree:
    return EMPTY


def example_tree() -> Tree:
    return build_from_sequence(SAMPLE_BST_VALUES)


def random_values(n: int, lo: int = RANDOM_MIN, hi: int = RANDOM_MAX,
                  rng: Optional[random.Random] = None) -> List[int]:
    """
    ``n`` distinct random integers from [lo, hi], in insertion order.

    Sampled without replacement; ``n`` is clamped to the size of the
    range (and to 0 from below).
    """
    rng = rng or random.Random()
    if hi < lo:
        raise InputError(f"empty range [{lo}, {hi}]")
    n = max(0, min(n, hi - lo + 1))
    return rng.sample(range(lo, hi + 1), n)


def random_tree(n: int, lo: int = RANDOM_MIN, hi: int = RANDOM_MAX,
                rng: Optional[random.Random] = None) -> Tree:
    return build_from_sequence(random_values(n, lo, hi, rng))


def skewed_tree(n: int, lo: int = RANDOM_MIN, hi: int = RANDOM_MAX,
                rng: Optional[random.Random] = None,
                direction: str = "right") -> Tree:
    """
    Degenerate tree: random values inserted in sorted order.

    Args:
        direction : "right" (ascending inserts → right spine) or
                    "left" (descending inserts → left spine).
    """
    if direction not in ("left", "right"):
        raise InputError(f"direction must be 'left' or 'right', not {direction!r}")
    values = sorted(random_values(n, lo, hi, rng),
                    reverse=(direction == "left"))
    return build_from_sequence(values)


# ═════════════════════════════════════════════════════════════════
#  INPUT PARSING
# ═════════════════════════════════════════════════════════════════

def _to_number(token: str) -> Number:
    try:
        return int(token)                    # try integer first
    except ValueError:
        return float(token)                  # may raise ValueError


def parse_value(text: str, lo: Number = DEFAULT_VALUE_MIN,
                hi: Number = DEFAULT_VALUE_MAX) -> Number:
    """
    Parse a single key typed by the user.

    Args:
        text   : Raw input, e.g. "37" or "12.5".
        lo, hi : Inclusive accepted range.

    Returns:
        int | float: The parsed value (int when it has no fraction).

    Raises:
        InputError: not a number, NaN/infinite, or outside [lo, hi].
    """
    token = str(text).strip()
    try:
        value = _to_number(token)
    except ValueError:
        raise InputError(f"{token!r} is not a number") from None

    if isinstance(value, float):
        if not math.isfinite(value):
            raise InputError(f"{token!r} is not a finite number")
        if value.is_integer():
            value = int(value)
    if not lo <= value <= hi:
        raise InputError(f"{token} is out of range [{lo}, {hi}]")
    return value


def parse_values(text: str, lo: Number = DEFAULT_VALUE_MIN,
                 hi: Number = DEFAULT_VALUE_MAX) -> List[Number]:
    """
    Parse comma/space separated numbers, e.g. "7, 3, 18, abc, 10.5".

    Each token goes through parse_value(); tokens it rejects (not a
    number, not finite, outside [lo, hi]) are skipped and logged,
    matching how the tree-building input box behaves.

    Examples:
        >>> parse_values("7,3,18,10,22")
        [7, 3, 18, 10, 22]
        >>> parse_values("1 2 3 abc 4 100000")
        [1, 2, 3, 4]
    """
    result = []
    for token in text.replace(",", " ").split():
        try:
            result.append(parse_value(token, lo, hi))
        except InputError as exc:
            logger.warning("skipping token: %s", exc)
    return result
