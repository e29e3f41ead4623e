"""Plain-text reports for evaluation results.

Formats trial results, Monte Carlo summaries and error histograms into
aligned tables for terminal output.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from cmsketch_lite.evaluation.harness import AnalysisSummary, TrialResult
from cmsketch_lite.sketch.countmin import CountMinSketch


def format_trial_table(results: Sequence[TrialResult], label: str = "Trial") -> str:
    """Item, true count, estimate, signed error and error % per row."""
    lines = [
        f"=== {label} ===",
        f"{'Item':<20} {'True':>8} {'Estimated':>10} {'Error':>8} {'Error %':>9}",
        "-" * 59,
    ]
    for r in results:
        lines.append(
            f"{r.item:<20} {r.true_count:>8,} {r.estimate:>10,} "
            f"{r.error:>+8} {r.error_percent:>8.2f}%"
        )
    return "\n".join(lines)


def format_summary(summary: AnalysisSummary, label: str = "Theoretical analysis") -> str:
    lines = [
        f"=== {label} ===",
        f"Sketch:              {summary.depth} x {summary.width} "
        f"({summary.trials} trials)",
        f"Total stream size:   {summary.total_stream_size:,}",
        f"Error bound:         <= {summary.theoretical_bound:,}",
        f"Markov bound:        <= {summary.markov_bound}",
        f"Failure bound:       <= {summary.failure_probability_bound:.4g} (2^-{summary.depth})",
        f"",
        f"Average error:       {summary.average_error:.2f}",
        f"Error range:         [{summary.min_error}, {summary.max_error}]",
        f"Overestimation rate: {summary.overestimation_rate * 100:.2f}%",
    ]
    return "\n".join(lines)


def format_histogram(histogram: Mapping[int, int], bar_width: int = 40) -> str:
    """Horizontal bar chart of error -> frequency, scaled to the tallest bar."""
    if not histogram:
        return "(no errors recorded)"
    peak = max(histogram.values())
    lines = []
    for error in sorted(histogram):
        freq = histogram[error]
        # at least one cell so rare errors stay visible
        bar = "#" * max(1, round(freq / peak * bar_width))
        lines.append(f"{error:>6} | {bar} {freq}")
    return "\n".join(lines)


def format_bucket_map(sketch: CountMinSketch, items: Iterable[str]) -> str:
    """Which column each item lands in per row, plus sketch dimensions."""
    lines = [
        f"Total items processed: {sketch.total:,}",
        f"Sketch dimensions: {sketch.depth} x {sketch.width} = "
        f"{sketch.depth * sketch.width:,} total buckets",
    ]
    for item in items:
        cols = ", ".join(str(b) for b in sketch.buckets(item))
        lines.append(f"  {item:<20} [{cols}]")
    return "\n".join(lines)


def format_sweep(summaries: Sequence[AnalysisSummary]) -> str:
    """Width vs mean error vs S/width bound."""
    lines = [
        f"{'Width':>8} {'Mean error':>12} {'Max error':>10} {'Bound':>8} {'Over %':>8}",
        "-" * 50,
    ]
    for s in summaries:
        lines.append(
            f"{s.width:>8} {s.average_error:>12.2f} {s.max_error:>10} "
            f"{s.theoretical_bound:>8} {s.overestimation_rate * 100:>7.1f}%"
        )
    return "\n".join(lines)
