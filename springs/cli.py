"""
Command-line entry point.

Reads condition records from a file (``input`` by default) and prints the
plain and unfolded arrangement totals::

    $ python -m springs puzzle.txt
    part one: 21
    part two: 525152

Exit status is 0 on success and 1 when the input, a line in it, or the
settings file is invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from springs.config.settings import load_settings
from springs.counter.registry import list_strategies
from springs.orchestrator.pipeline import PipelineError, solve_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="springs",
        description="Count damaged-spring arrangements for each condition record.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="input",
        help="file with one '<pattern> <groups>' record per line (default: %(default)s)",
    )
    parser.add_argument("--config", help="YAML settings file overriding the bundled defaults")
    parser.add_argument("--strategy", choices=list_strategies(), help="counting strategy")
    parser.add_argument("--workers", type=int, help="worker processes used for counting")
    parser.add_argument("--multiplicity", type=int, help="copies produced by the unfold step")
    parser.add_argument(
        "--collect-errors",
        action="store_true",
        help="report every malformed line instead of stopping at the first",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config).replace(
            strategy=args.strategy,
            workers=args.workers,
            multiplicity=args.multiplicity,
            parse_policy="collect" if args.collect_errors else None,
        )
    except (OSError, ValueError) as exc:
        print(f"error: [config] {exc}", file=sys.stderr)
        return 1

    try:
        totals = solve_file(args.input, settings=settings)
    except PipelineError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"part one: {totals.plain}")
    print(f"part two: {totals.unfolded}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
