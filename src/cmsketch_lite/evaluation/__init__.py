"""Evaluation harness: streams, trials, Monte Carlo analysis and reports."""

from cmsketch_lite.evaluation.harness import (
    AnalysisSummary,
    MonteCarloResult,
    TrialResult,
    run_monte_carlo_analysis,
    run_single_trial,
    run_width_sweep,
    summarize_errors,
)
from cmsketch_lite.evaluation.report import (
    format_bucket_map,
    format_histogram,
    format_summary,
    format_sweep,
    format_trial_table,
)
from cmsketch_lite.evaluation.streams import (
    ARTIFICIAL_FREQUENCIES,
    CLICKSTREAM_PROBABILITIES,
    build_artificial_stream,
    build_skewed_stream,
    true_frequencies,
)

__all__ = [
    "ARTIFICIAL_FREQUENCIES",
    "AnalysisSummary",
    "CLICKSTREAM_PROBABILITIES",
    "MonteCarloResult",
    "TrialResult",
    "build_artificial_stream",
    "build_skewed_stream",
    "format_bucket_map",
    "format_histogram",
    "format_summary",
    "format_sweep",
    "format_trial_table",
    "run_monte_carlo_analysis",
    "run_single_trial",
    "run_width_sweep",
    "summarize_errors",
    "true_frequencies",
]
