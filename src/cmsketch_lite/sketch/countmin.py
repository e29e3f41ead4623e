"""Count-Min Sketch for frequency estimation.

Answers the question: "How many times has this item appeared in the
stream?" in a fixed depth x width table of counters, regardless of how
many distinct items pass through it. The tradeoff: it never
underestimates, but it can overestimate by a bounded amount.

To increment, hash the item with each row's hash function and bump the
counter it lands on. To query, hash with each row's function and
return the minimum of those counters. Every true occurrence of an item
increments all of its counters, so collisions can only inflate a row,
never deflate it. The minimum across independent rows is the row with
the least collision mass.

Error bound: the expected collision mass in one row is at most
S / width, where S is the total count added. By Markov's inequality a
single row exceeds twice that with probability <= 1/2, and the minimum
over independent rows exceeds it with probability <= 2^-depth.

References:
    Cormode & Muthukrishnan, "An Improved Data Stream Summary:
    The Count-Min Sketch and its Applications", 2005.
"""

from __future__ import annotations

import logging
import math

from cmsketch_lite.sketch.hashing import DEFAULT_BASE_SEED, HashFamily

log = logging.getLogger(__name__)


class InvalidDimension(ValueError):
    """Raised when a sketch is constructed with a non-positive or non-integer size."""


def _check_dimension(name: str, value: object) -> int:
    # bool is an int subclass; True must not pass as width 1
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidDimension(f"{name} must be a positive integer, got {value!r}")
    return value


class CountMinSketch:
    """Count-Min Sketch for approximate frequency counting.

    Parameters:
        width: Number of counters per row.
        depth: Number of rows / hash functions.
        seed: Base seed for the hash family. Two sketches with the same
            (width, depth, seed) fed the same stream end up with
            identical tables.

    Counters are Python ints, so they never overflow.
    """

    __slots__ = ("_width", "_depth", "_total", "_hashes", "_table")

    def __init__(self, width: int, depth: int, seed: int = DEFAULT_BASE_SEED) -> None:
        self._width = _check_dimension("width", width)
        self._depth = _check_dimension("depth", depth)
        self._total = 0
        self._hashes = HashFamily(depth, base_seed=seed)
        self._table: list[list[int]] = [[0] * width for _ in range(depth)]
        log.debug("CountMinSketch %dx%d seeds=%s", depth, width, self._hashes.seeds)

    @property
    def width(self) -> int:
        return self._width

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def seed(self) -> int:
        return self._hashes.base_seed

    @property
    def hash_family(self) -> HashFamily:
        return self._hashes

    @property
    def total(self) -> int:
        """Sum of every count added so far (the stream length S)."""
        return self._total

    def increment(self, item: str, count: int = 1) -> None:
        """Add `count` occurrences of `item`. Touches exactly `depth` counters."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"count must be a positive integer, got {count!r}")
        width = self._width
        for row, fn in zip(self._table, self._hashes):
            row[fn(item) % width] += count
        self._total += count

    add = increment

    def estimate(self, item: str) -> int:
        """Estimate the count for an item.

        Returns the minimum counter value across all rows. This is
        always >= the true count.
        """
        width = self._width
        return min(row[fn(item) % width] for row, fn in zip(self._table, self._hashes))

    def buckets(self, item: str) -> tuple[int, ...]:
        """Column `item` maps to in each row."""
        return self._hashes.buckets(item, self._width)

    def get_table(self) -> tuple[tuple[int, ...], ...]:
        """Snapshot of the counter matrix. Mutating it cannot touch the sketch."""
        return tuple(tuple(row) for row in self._table)

    def memory_bytes(self) -> int:
        """Counter storage if packed as uint32, for comparison with exact counting."""
        return self._width * self._depth * 4

    def epsilon(self) -> float:
        """Error bound: overestimate <= epsilon * total with prob >= 1-delta."""
        return math.e / self._width

    def delta(self) -> float:
        """Failure probability: P(overestimate > epsilon * total) <= delta."""
        return math.e ** (-self._depth)

    def error_bound(self) -> int:
        """Expected per-row collision mass, ceil(total / width)."""
        return math.ceil(self._total / self._width)

    def __repr__(self) -> str:
        return (
            f"CountMinSketch(width={self._width}, depth={self._depth}, "
            f"total={self._total})"
        )
