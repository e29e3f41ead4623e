"""Shared fixtures for evaluation tests."""
from __future__ import annotations

import pytest

from cmsketch_lite.evaluation.streams import (
    ARTIFICIAL_FREQUENCIES,
    CLICKSTREAM_PROBABILITIES,
    build_artificial_stream,
    build_skewed_stream,
)

SEED = 42


@pytest.fixture
def artificial_stream() -> list[str]:
    return build_artificial_stream(ARTIFICIAL_FREQUENCIES)


@pytest.fixture
def clickstream() -> list[str]:
    return build_skewed_stream(2_000, CLICKSTREAM_PROBABILITIES, seed=SEED)


@pytest.fixture
def wide_stream() -> list[str]:
    """200 distinct items, 10 occurrences each: plenty of collision mass."""
    return build_artificial_stream({f"item-{i:03d}": 10 for i in range(200)})
