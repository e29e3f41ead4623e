"""Count-Min Sketch and its hash family.

Public API:
    CountMinSketch: depth x width counter table, one-sided error
    InvalidDimension: raised for non-positive or non-integer sizes
    HashFamily: depth seeded 32-bit hash functions
    HashFunction: one seeded hash, callable on a string item
"""

from cmsketch_lite.sketch.countmin import CountMinSketch, InvalidDimension
from cmsketch_lite.sketch.hashing import (
    DEFAULT_BASE_SEED,
    SEED_STRIDE,
    HashFamily,
    HashFunction,
    avalanche_32,
    fnv1a_32,
)

__all__ = [
    "CountMinSketch",
    "DEFAULT_BASE_SEED",
    "HashFamily",
    "HashFunction",
    "InvalidDimension",
    "SEED_STRIDE",
    "avalanche_32",
    "fnv1a_32",
]
