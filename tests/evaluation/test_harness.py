"""Tests for single trials and Monte Carlo analysis."""
from __future__ import annotations

import math

import pytest

from cmsketch_lite.evaluation import harness
from cmsketch_lite.evaluation.harness import (
    MARKOV_BOUND,
    run_monte_carlo_analysis,
    run_single_trial,
    run_width_sweep,
    summarize_errors,
)
from cmsketch_lite.evaluation.streams import ARTIFICIAL_FREQUENCIES, true_frequencies


class TestSingleTrial:
    def test_one_result_per_distinct_item(self, artificial_stream):
        results = run_single_trial(artificial_stream, 100, 5)
        assert [r.item for r in results] == list(ARTIFICIAL_FREQUENCIES)

    def test_true_counts_are_exact(self, artificial_stream):
        results = run_single_trial(artificial_stream, 100, 5)
        for r in results:
            assert r.true_count == ARTIFICIAL_FREQUENCIES[r.item]

    def test_error_fields_consistent(self, clickstream):
        for r in run_single_trial(clickstream, 10, 2):
            assert r.error == r.estimate - r.true_count
            assert r.error_percent == pytest.approx(r.error / r.true_count * 100)

    def test_never_underestimates(self, wide_stream):
        for r in run_single_trial(wide_stream, 16, 3):
            assert r.error >= 0

    def test_width_one_error_is_rest_of_stream(self, clickstream):
        for r in run_single_trial(clickstream, 1, 3):
            assert r.estimate == len(clickstream)
            assert r.error == len(clickstream) - r.true_count

    def test_same_seed_same_results(self, wide_stream):
        a = run_single_trial(wide_stream, 32, 3, seed=11)
        b = run_single_trial(wide_stream, 32, 3, seed=11)
        assert a == b

    def test_empty_stream(self):
        assert run_single_trial([], 10, 2) == []

    def test_invalid_dimension_propagates(self, clickstream):
        from cmsketch_lite.sketch.countmin import InvalidDimension
        with pytest.raises(InvalidDimension):
            run_single_trial(clickstream, 0, 5)


class TestMonteCarlo:
    def test_histogram_counts_every_item_every_trial(self, clickstream):
        trials = 5
        result = run_monte_carlo_analysis(clickstream, 10, 3, trials, seed=1)
        n_items = len(true_frequencies(clickstream))
        assert sum(result.histogram.values()) == trials * n_items
        assert len(result.errors) == trials * n_items

    def test_histogram_keys_ascending(self, wide_stream):
        result = run_monte_carlo_analysis(wide_stream, 16, 2, 4, seed=1)
        keys = list(result.histogram)
        assert keys == sorted(keys)

    def test_summary_bounds(self, clickstream):
        result = run_monte_carlo_analysis(clickstream, 30, 4, 3, seed=1)
        s = result.summary
        assert s.total_stream_size == len(clickstream)
        assert s.theoretical_bound == math.ceil(len(clickstream) / 30)
        assert s.markov_bound == MARKOV_BOUND == 0.5
        assert s.failure_probability_bound == 2 ** -4
        assert s.trials == 3
        assert (s.width, s.depth) == (30, 4)

    def test_summary_statistics_match_errors(self, wide_stream):
        result = run_monte_carlo_analysis(wide_stream, 16, 2, 3, seed=5)
        errs = result.errors
        s = result.summary
        assert s.average_error == pytest.approx(sum(errs) / len(errs))
        assert s.min_error == min(errs)
        assert s.max_error == max(errs)
        assert s.overestimation_rate == pytest.approx(
            sum(1 for e in errs if e > 0) / len(errs)
        )
        assert s.min_error >= 0

    def test_reproducible_with_seed(self, wide_stream):
        a = run_monte_carlo_analysis(wide_stream, 16, 3, 4, seed=9)
        b = run_monte_carlo_analysis(wide_stream, 16, 3, 4, seed=9)
        assert a.histogram == b.histogram
        assert a.summary == b.summary

    def test_each_trial_gets_fresh_hashes(self, clickstream, monkeypatch):
        seen: list[int] = []
        original = harness.run_single_trial

        def spy(stream, width, depth, seed):
            seen.append(seed)
            return original(stream, width, depth, seed=seed)

        monkeypatch.setattr(harness, "run_single_trial", spy)
        run_monte_carlo_analysis(clickstream, 10, 2, 20, seed=3)
        assert len(seen) == 20
        assert len(set(seen)) == 20

    def test_width_one_every_error_known(self, clickstream):
        result = run_monte_carlo_analysis(clickstream, 1, 2, 3, seed=0)
        exact = true_frequencies(clickstream)
        expected = {len(clickstream) - c for c in exact.values()}
        assert set(result.histogram) == expected

    @pytest.mark.parametrize("trials", [0, -3, 2.5])
    def test_invalid_trials(self, clickstream, trials):
        with pytest.raises(ValueError):
            run_monte_carlo_analysis(clickstream, 10, 2, trials)

    def test_empty_stream(self):
        result = run_monte_carlo_analysis([], 10, 2, 3, seed=0)
        assert result.histogram == {}
        assert result.summary.average_error == 0.0
        assert result.summary.overestimation_rate == 0.0
        assert result.summary.theoretical_bound == 0

    def test_as_dict_keys(self, clickstream):
        d = run_monte_carlo_analysis(clickstream, 10, 2, 2, seed=0).summary.as_dict()
        assert set(d) == {
            "totalStreamSize", "theoreticalBound", "markovBound",
            "averageError", "minError", "maxError", "overestimationRate",
        }

    def test_elapsed_recorded(self, clickstream):
        result = run_monte_carlo_analysis(clickstream, 10, 2, 2, seed=0)
        assert result.elapsed_ms >= 0


class TestSummarizeErrors:
    def test_rate_is_fraction(self):
        s = summarize_errors([0, 0, 3, 5], total_stream_size=100, width=10, depth=2, trials=1)
        assert s.overestimation_rate == 0.5
        assert s.average_error == 2.0
        assert (s.min_error, s.max_error) == (0, 5)
        assert s.theoretical_bound == 10


@pytest.mark.benchmark
class TestErrorConvergence:
    """Mean error tracks S/width and shrinks as width grows."""

    def test_mean_error_falls_with_width(self, wide_stream):
        summaries = run_width_sweep(wide_stream, [20, 200, 2000], depth=5, trials=10, seed=42)
        means = [s.average_error for s in summaries]
        print(f"\n  width sweep means: {means}")
        assert means[0] > means[1] > means[2]

    def test_mean_error_within_bound(self, wide_stream):
        for s in run_width_sweep(wide_stream, [20, 200], depth=5, trials=10, seed=7):
            assert s.average_error <= s.theoretical_bound

    def test_clickstream_scenario(self, clickstream):
        """Six labels in 5 x 100: most estimates are exact."""
        result = run_monte_carlo_analysis(clickstream, 100, 5, 50, seed=42)
        print(f"\n  clickstream mean error {result.summary.average_error:.2f}, "
              f"overestimation {result.summary.overestimation_rate:.2%}")
        assert result.summary.min_error == 0
        assert result.summary.overestimation_rate < 0.1
