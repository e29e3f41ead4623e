"""Stream construction and ground truth for sketch evaluation.

Two kinds of input:
  - artificial streams: exact counts chosen up front, so every
    estimate can be checked against a known answer
  - skewed streams: labels drawn from a fixed discrete distribution,
    approximating the Pareto-shaped traffic of real clickstreams
    (a few actions dominate, a long tail of rare ones)

A stream is a plain list of item labels, one entry per occurrence.
"""
from __future__ import annotations

import math
import random
from collections import Counter
from typing import Iterable, Mapping

DEFAULT_WIDTH = 100
DEFAULT_DEPTH = 5
DEFAULT_TRIALS = 100
DEFAULT_SKEWED_TOTAL = 10_000

ARTIFICIAL_FREQUENCIES: dict[str, int] = {
    "A": 1000,
    "B": 500,
    "C": 200,
    "D": 100,
    "E": 50,
}

# User actions on a web app, roughly 80/20
CLICKSTREAM_PROBABILITIES: dict[str, float] = {
    "click:home": 0.50,
    "login": 0.25,
    "click:profile": 0.10,
    "logout": 0.07,
    "click:settings": 0.05,
    "click:help": 0.03,
}


def build_artificial_stream(frequencies: Mapping[str, int]) -> list[str]:
    """Expand {item: count} into a stream, items grouped in mapping order."""
    stream: list[str] = []
    for item, count in frequencies.items():
        if count < 0:
            raise ValueError(f"count for {item!r} must be >= 0, got {count}")
        stream.extend([item] * count)
    return stream


def build_skewed_stream(
    total_count: int,
    probabilities: Mapping[str, float],
    rng: random.Random | None = None,
    seed: int | None = None,
) -> list[str]:
    """Draw `total_count` labels from a fixed discrete distribution.

    Each draw takes a uniform r in [0, 1) and picks the first label
    whose cumulative probability exceeds r. The last label absorbs any
    floating-point shortfall in the cumulative sum.

    Pass `rng` to share a generator with the caller, or `seed` for a
    reproducible stream. With neither, draws come from a fresh
    unseeded generator.
    """
    if total_count < 0:
        raise ValueError(f"total_count must be >= 0, got {total_count}")
    if not probabilities:
        raise ValueError("probabilities must name at least one label")
    if any(p < 0 for p in probabilities.values()):
        raise ValueError("probabilities must be non-negative")
    if not math.isclose(sum(probabilities.values()), 1.0, abs_tol=1e-9):
        raise ValueError(
            f"probabilities must sum to 1, got {sum(probabilities.values())}"
        )
    if rng is None:
        rng = random.Random(seed)

    labels = list(probabilities)
    thresholds: list[float] = []
    cumulative = 0.0
    for label in labels:
        cumulative += probabilities[label]
        thresholds.append(cumulative)
    last = labels[-1]

    stream = []
    for _ in range(total_count):
        r = rng.random()
        chosen = last
        for label, threshold in zip(labels, thresholds):
            if r < threshold:
                chosen = label
                break
        stream.append(chosen)
    return stream


def true_frequencies(stream: Iterable[str]) -> Counter[str]:
    """Exact per-item tally. Keys keep first-appearance order."""
    return Counter(stream)
