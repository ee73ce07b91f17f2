"""
Command line front end.

    bstviz search 37 --example
    bstviz remove 25 --values "50,25,75,12,37,62,87" --pdf remove.pdf
    bstviz inorder --random 10 --seed 3 --delay 500
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys

from .errors import ExportError, InputError
from .generators import build_trace
from .player import Player, PlaybackView
from .samples import (example_tree, empty_tree, parse_value, parse_values,
                      random_tree, skewed_tree)
from .settings import THEMES, Settings
from .steps import Operation, format_value
from .tree import build_from_sequence, inorder_values

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bstviz",
        description="Step through binary search tree algorithms",
    )
    parser.add_argument(
        "operation",
        choices=[op.value for op in Operation],
        help="Algorithm to replay",
    )
    parser.add_argument(
        "argument",
        nargs="?",
        help="Value v (or k for select); not used by min/max/traversals",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--values", help='Insertion order, e.g. "50,25,75"')
    source.add_argument("--example", action="store_true",
                        help="Use the 15-node example tree (default)")
    source.add_argument("--empty", action="store_true", help="Start from an empty tree")
    source.add_argument("--random", type=int, metavar="N", help="N random values")
    source.add_argument("--skewed", type=int, metavar="N",
                        help="N random values inserted in sorted order")
    parser.add_argument("--skew-direction", choices=["left", "right"], default="right")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --random/--skewed")

    parser.add_argument("--delay", type=int, default=0, metavar="MS",
                        help="Pause between printed steps (default: 0)")
    parser.add_argument("--json", action="store_true", help="Print the trace as JSON")
    parser.add_argument("--png", metavar="FILE", help="Render one step to PNG")
    parser.add_argument("--step", type=int, default=-1,
                        help="Step index for --png (default: last)")
    parser.add_argument("--pdf", metavar="FILE", help="Write a PDF walkthrough")
    parser.add_argument("--video", metavar="FILE", help="Write an MP4 walkthrough")
    parser.add_argument("--fps", type=int, default=10, help="Video frame rate")
    parser.add_argument("--theme", choices=sorted(THEMES), default=None)
    parser.add_argument("--settings", metavar="PATH", default=None,
                        help="Settings file (default: ~/.bstviz.json)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging")
    return parser


def _initial_tree(args, settings):
    rng = random.Random(args.seed)
    if args.values is not None:
        return build_from_sequence(
            parse_values(args.values, settings.value_min, settings.value_max))
    if args.empty:
        return empty_tree()
    if args.random is not None:
        return random_tree(args.random, rng=rng)
    if args.skewed is not None:
        return skewed_tree(args.skewed, rng=rng, direction=args.skew_direction)
    return example_tree()


def _operation_argument(parser, args, operation, settings):
    if not operation.takes_argument:
        if args.argument is not None:
            parser.error(f"{operation.value} takes no argument")
        return None
    if args.argument is None:
        parser.error(f"{operation.value} requires an argument")
    try:
        value = parse_value(args.argument, settings.value_min, settings.value_max)
    except InputError as exc:
        parser.error(str(exc))
    if operation is Operation.SELECT and not isinstance(value, int):
        parser.error("k must be a whole number")
    return value


def _print_view(view: PlaybackView) -> None:
    node = format_value(view.active_node)
    print(f"[{view.position + 1}/{view.total}] {view.status_text}"
          f"  (line {view.highlight_index}, node {node})")


def _print_code(code) -> None:
    for i, line in enumerate(code):
        print(f"  {i:2d} | {line}")
    print()


def _export(args, trace, settings) -> None:
    if not (args.png or args.pdf or args.video):
        return
    # Imported lazily: rendering pulls in Pillow, reportlab and numpy.
    from .export import PDFExporter, VideoExporter, export_png

    if args.png:
        export_png(trace, args.step, args.png, settings)
        print(f"PNG written to {args.png}")
    if args.pdf:
        PDFExporter(settings).export(trace, args.pdf)
        print(f"PDF written to {args.pdf}")
    if args.video:
        VideoExporter(settings).export(trace, args.video, fps=args.fps)
        print(f"Video written to {args.video}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = Settings(path=args.settings)
    if args.theme:
        settings.theme = args.theme

    operation = Operation(args.operation)
    value = _operation_argument(parser, args, operation, settings)
    try:
        tree = _initial_tree(args, settings)
    except InputError as exc:
        parser.error(str(exc))

    logger.debug("initial tree: %s", inorder_values(tree))
    trace = build_trace(operation, tree, value)

    if args.json:
        print(json.dumps(trace.to_dict(), indent=2))
    else:
        print(trace.label)
        _print_code(trace.code)
        Player(trace).play(args.delay, _print_view)
        print()
        print(f"Result: {trace.final_step.result.value}")
        if operation.mutates:
            print("In-order after: " + ", ".join(
                format_value(v) for v in inorder_values(trace.result_tree)))

    try:
        _export(args, trace, settings)
    except ExportError as exc:
        print(f"\nError: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
