"""Evaluation harness: sketch estimates vs exact counts.

A single trial replays a stream through one freshly built sketch and
compares every item's estimate to its exact tally. One trial only
shows how one particular set of hash functions happens to collide on
this stream. The Monte Carlo analysis repeats the trial with an
independently seeded sketch each time and pools all the errors, which
is the expected-case behavior the S/width bound actually describes.

Trials never share a sketch. Each one builds its own table, and
results are combined only after every trial has finished.
"""
from __future__ import annotations

import logging
import math
import random
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from cmsketch_lite.evaluation.streams import true_frequencies
from cmsketch_lite.sketch.countmin import CountMinSketch
from cmsketch_lite.sketch.hashing import DEFAULT_BASE_SEED

log = logging.getLogger(__name__)

# Markov's inequality: one row exceeds twice its expected collision mass
# with probability at most 1/2
MARKOV_BOUND = 0.5


@dataclass(slots=True)
class TrialResult:
    """One item's outcome from a single trial."""
    item: str
    true_count: int
    estimate: int
    error: int
    error_percent: float


@dataclass(slots=True)
class AnalysisSummary:
    """Pooled error statistics over every item of every trial."""
    total_stream_size: int
    theoretical_bound: int
    markov_bound: float
    failure_probability_bound: float
    average_error: float
    min_error: int
    max_error: int
    overestimation_rate: float
    trials: int
    width: int
    depth: int

    def as_dict(self) -> dict[str, float | int]:
        """Summary under the key names the presentation layer reads."""
        return {
            "totalStreamSize": self.total_stream_size,
            "theoreticalBound": self.theoretical_bound,
            "markovBound": self.markov_bound,
            "averageError": self.average_error,
            "minError": self.min_error,
            "maxError": self.max_error,
            "overestimationRate": self.overestimation_rate,
        }


@dataclass(slots=True)
class MonteCarloResult:
    """Summary, histogram (error -> frequency, ascending) and raw errors."""
    summary: AnalysisSummary
    histogram: dict[int, int]
    errors: list[int] = field(repr=False)
    elapsed_ms: float = 0.0


def run_single_trial(
    stream: Sequence[str],
    width: int,
    depth: int,
    seed: int = DEFAULT_BASE_SEED,
) -> list[TrialResult]:
    """Replay `stream` through a fresh sketch and score every distinct item.

    Results come back in first-appearance order.
    """
    sketch = CountMinSketch(width, depth, seed=seed)
    for item in stream:
        sketch.increment(item)
    exact = true_frequencies(stream)

    results = []
    for item, true_count in exact.items():
        est = sketch.estimate(item)
        error = est - true_count
        results.append(TrialResult(
            item=item,
            true_count=true_count,
            estimate=est,
            error=error,
            error_percent=error / true_count * 100,
        ))
    return results


def summarize_errors(
    errors: Sequence[int],
    total_stream_size: int,
    width: int,
    depth: int,
    trials: int,
) -> AnalysisSummary:
    """Reduce pooled errors to an AnalysisSummary.

    With no errors (empty stream) every statistic is zero.
    """
    n = len(errors)
    return AnalysisSummary(
        total_stream_size=total_stream_size,
        theoretical_bound=math.ceil(total_stream_size / width),
        markov_bound=MARKOV_BOUND,
        failure_probability_bound=2.0 ** -depth,
        average_error=sum(errors) / n if n else 0.0,
        min_error=min(errors) if n else 0,
        max_error=max(errors) if n else 0,
        overestimation_rate=sum(1 for e in errors if e > 0) / n if n else 0.0,
        trials=trials,
        width=width,
        depth=depth,
    )


def run_monte_carlo_analysis(
    stream: Sequence[str],
    width: int,
    depth: int,
    trials: int,
    seed: int | None = None,
) -> MonteCarloResult:
    """Repeat `run_single_trial` `trials` times with independent hash draws.

    Every trial gets its own base seed from a `random.Random(seed)`, so
    no two trials reuse the same hash functions, yet the whole analysis
    is reproducible for a given `seed`. Errors from every item of every
    trial are pooled into one histogram and one summary.
    """
    if isinstance(trials, bool) or not isinstance(trials, int) or trials < 1:
        raise ValueError(f"trials must be a positive integer, got {trials!r}")
    rng = random.Random(seed)
    errors: list[int] = []

    t0 = time.perf_counter()
    for t in range(trials):
        trial_seed = rng.getrandbits(32)
        results = run_single_trial(stream, width, depth, seed=trial_seed)
        errors.extend(r.error for r in results)
        log.debug("trial %d/%d seed=%#010x items=%d", t + 1, trials, trial_seed, len(results))
    elapsed_ms = (time.perf_counter() - t0) * 1000

    summary = summarize_errors(errors, len(stream), width, depth, trials)
    histogram = dict(sorted(Counter(errors).items()))
    log.info(
        "monte carlo %dx%d: %d trials, S=%d, mean error %.2f (bound %d), %.1f ms",
        depth, width, trials, summary.total_stream_size,
        summary.average_error, summary.theoretical_bound, elapsed_ms,
    )
    return MonteCarloResult(
        summary=summary,
        histogram=histogram,
        errors=errors,
        elapsed_ms=elapsed_ms,
    )


def run_width_sweep(
    stream: Sequence[str],
    widths: Iterable[int],
    depth: int,
    trials: int,
    seed: int | None = None,
) -> list[AnalysisSummary]:
    """Monte Carlo summary for each width, depth held fixed.

    Each width reuses `seed`, so the sweep as a whole is reproducible.
    """
    return [
        run_monte_carlo_analysis(stream, w, depth, trials, seed=seed).summary
        for w in widths
    ]
