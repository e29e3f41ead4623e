"""cmsketch-lite CLI entry point.

Usage: uv run cmsketch-lite [command]
"""
from __future__ import annotations

import argparse
import logging
import random
import sys


def _parse_widths(text: str) -> list[int]:
    try:
        return [int(w) for w in text.split(",") if w.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected comma-separated integers, got {text!r}"
        ) from None


def _add_sketch_args(p: argparse.ArgumentParser) -> None:
    from cmsketch_lite.evaluation.streams import DEFAULT_DEPTH, DEFAULT_WIDTH

    p.add_argument(
        "--width", type=int, default=DEFAULT_WIDTH,
        help=f"Buckets per row (default: {DEFAULT_WIDTH})",
    )
    p.add_argument(
        "--depth", type=int, default=DEFAULT_DEPTH,
        help=f"Rows / hash functions (default: {DEFAULT_DEPTH})",
    )


def _add_stream_args(p: argparse.ArgumentParser) -> None:
    from cmsketch_lite.evaluation.streams import DEFAULT_SKEWED_TOTAL, DEFAULT_TRIALS

    p.add_argument(
        "--total", type=int, default=DEFAULT_SKEWED_TOTAL,
        help=f"Events in the skewed stream (default: {DEFAULT_SKEWED_TOTAL})",
    )
    p.add_argument(
        "--trials", type=int, default=DEFAULT_TRIALS,
        help=f"Independent sketches per analysis (default: {DEFAULT_TRIALS})",
    )
    p.add_argument(
        "--seed", type=int, default=None,
        help="RNG seed for reproducible streams and hash draws",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmsketch-lite",
        description="Count-Min Sketch accuracy evaluation -- pure Python.",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command")

    p = subparsers.add_parser(
        "artificial",
        help="Feed known exact counts (A..E) through one sketch.",
    )
    _add_sketch_args(p)
    p.add_argument(
        "--show-buckets", action="store_true",
        help="Print the column each item maps to in every row.",
    )

    p = subparsers.add_parser(
        "skewed",
        help="Clickstream trial plus Monte Carlo error analysis.",
    )
    _add_sketch_args(p)
    _add_stream_args(p)
    p.add_argument(
        "--bar-width", type=int, default=40,
        help="Histogram bar width in characters (default: 40)",
    )

    p = subparsers.add_parser(
        "sweep",
        help="Mean error across a range of widths at fixed depth.",
    )
    _add_sketch_args(p)
    _add_stream_args(p)
    p.add_argument(
        "--widths", type=_parse_widths, default=[25, 50, 100, 200, 400],
        help="Comma-separated widths (default: 25,50,100,200,400)",
    )
    return parser


def _run_artificial(args: argparse.Namespace) -> None:
    from cmsketch_lite.evaluation.harness import run_single_trial
    from cmsketch_lite.evaluation.report import format_bucket_map, format_trial_table
    from cmsketch_lite.evaluation.streams import (
        ARTIFICIAL_FREQUENCIES,
        build_artificial_stream,
    )
    from cmsketch_lite.sketch.countmin import CountMinSketch

    stream = build_artificial_stream(ARTIFICIAL_FREQUENCIES)
    results = run_single_trial(stream, args.width, args.depth)
    print(format_trial_table(results, label="Artificial dataset"))
    if args.show_buckets:
        sketch = CountMinSketch(args.width, args.depth)
        for item in stream:
            sketch.increment(item)
        print()
        print(format_bucket_map(sketch, ARTIFICIAL_FREQUENCIES))


def _run_skewed(args: argparse.Namespace) -> None:
    from cmsketch_lite.evaluation.harness import run_monte_carlo_analysis, run_single_trial
    from cmsketch_lite.evaluation.report import (
        format_histogram,
        format_summary,
        format_trial_table,
    )
    from cmsketch_lite.evaluation.streams import (
        CLICKSTREAM_PROBABILITIES,
        build_skewed_stream,
    )

    rng = random.Random(args.seed)
    stream = build_skewed_stream(args.total, CLICKSTREAM_PROBABILITIES, rng=rng)
    results = run_single_trial(stream, args.width, args.depth)
    analysis = run_monte_carlo_analysis(
        stream, args.width, args.depth, args.trials, seed=args.seed,
    )
    print(format_trial_table(results, label="Real-world dataset"))
    print()
    print(format_summary(analysis.summary))
    print()
    print("--- Error distribution (error -> frequency) ---")
    print(format_histogram(analysis.histogram, bar_width=args.bar_width))


def _run_sweep(args: argparse.Namespace) -> None:
    from cmsketch_lite.evaluation.harness import run_width_sweep
    from cmsketch_lite.evaluation.report import format_sweep
    from cmsketch_lite.evaluation.streams import (
        CLICKSTREAM_PROBABILITIES,
        build_skewed_stream,
    )

    stream = build_skewed_stream(args.total, CLICKSTREAM_PROBABILITIES, seed=args.seed)
    summaries = run_width_sweep(
        stream, args.widths, args.depth, args.trials, seed=args.seed,
    )
    print(f"=== Width sweep (depth={args.depth}, S={len(stream):,}, "
          f"{args.trials} trials) ===")
    print(format_sweep(summaries))


_COMMANDS = {
    "artificial": _run_artificial,
    "skewed": _run_skewed,
    "sweep": _run_sweep,
}


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        _COMMANDS[args.command](args)
    except ValueError as exc:
        # InvalidDimension and bad stream parameters
        parser.error(str(exc))
