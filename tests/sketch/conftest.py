"""Shared fixtures for sketch tests."""
from __future__ import annotations

import random

import pytest

from cmsketch_lite.sketch.countmin import CountMinSketch

SEED = 42


def zipf_stream(n: int, n_items: int = 100, seed: int = SEED) -> list[str]:
    rng = random.Random(seed)
    items = [f"page-{i}" for i in range(n_items)]
    weights = [1.0 / (i + 1) for i in range(n_items)]
    return rng.choices(items, weights=weights, k=n)


@pytest.fixture
def stream() -> list[str]:
    return zipf_stream(2_000)


@pytest.fixture
def loaded_sketch(stream: list[str]) -> CountMinSketch:
    cms = CountMinSketch(width=64, depth=4)
    for item in stream:
        cms.increment(item)
    return cms


@pytest.fixture
def make_stream():
    return zipf_stream
