"""Seeded 32-bit hash family for the Count-Min Sketch rows.

Each row of the sketch needs its own hash function, and the error
bound assumes those functions behave independently. We get a family
of them from one construction: FNV-1a with the seed XOR-ed into the
offset basis, followed by the murmur3 32-bit finalizer. FNV-1a alone
disperses short keys poorly in the low bits, and two seeds that differ
only in a few bits produce correlated outputs; the finalizer fixes
both.

Seeds are spaced by a large odd stride (the 32-bit golden ratio), so
adjacent rows get seeds whose bit patterns differ substantially and
no two rows share a seed for any realistic depth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193

DEFAULT_BASE_SEED = 0x5BD1E995
SEED_STRIDE = 0x9E3779B9


def avalanche_32(h: int) -> int:
    """murmur3 fmix32: spread every input bit across the output."""
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK32
    h ^= h >> 16
    return h


def fnv1a_32(item: str, seed: int) -> int:
    """Seeded FNV-1a over the code points of `item`, then avalanche-mixed.

    Returns an unsigned 32-bit integer. Pure: no state outside the
    arguments.
    """
    h = (_FNV_OFFSET_BASIS ^ seed) & _MASK32
    for ch in item:
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & _MASK32
    return avalanche_32(h)


@dataclass(frozen=True, slots=True)
class HashFunction:
    """One row's hash: a seed bound to `fnv1a_32`."""

    seed: int

    def __call__(self, item: str) -> int:
        return fnv1a_32(item, self.seed)

    def bucket(self, item: str, width: int) -> int:
        return fnv1a_32(item, self.seed) % width


class HashFamily:
    """`depth` hash functions with pairwise distinct seeds.

    Parameters:
        depth: Number of functions (one per sketch row).
        base_seed: Seed of row 0. Row i uses
            (base_seed + i * SEED_STRIDE) mod 2**32.

    The family is fixed at construction. Because SEED_STRIDE is odd it
    is invertible mod 2**32, so the seeds are distinct for any depth
    below 2**32.
    """

    __slots__ = ("_functions", "_base_seed")

    def __init__(self, depth: int, base_seed: int = DEFAULT_BASE_SEED) -> None:
        if depth < 1:
            raise ValueError(f"depth must be positive, got {depth}")
        self._base_seed = base_seed & _MASK32
        self._functions: tuple[HashFunction, ...] = tuple(
            HashFunction((self._base_seed + i * SEED_STRIDE) & _MASK32)
            for i in range(depth)
        )

    @property
    def base_seed(self) -> int:
        return self._base_seed

    @property
    def seeds(self) -> tuple[int, ...]:
        return tuple(fn.seed for fn in self._functions)

    def buckets(self, item: str, width: int) -> tuple[int, ...]:
        """Column index for `item` in every row, in row order."""
        return tuple(fn.bucket(item, width) for fn in self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[HashFunction]:
        return iter(self._functions)

    def __getitem__(self, index: int) -> HashFunction:
        return self._functions[index]

    def __repr__(self) -> str:
        return f"HashFamily(depth={len(self._functions)}, base_seed={self._base_seed:#010x})"
