"""
Tests for per-device scoring: window selection, sub-scores and composition.
"""
import pytest
from conftest import NOW
from core.models.sample import Sample
from core.scoring.device import (
    availability_score,
    evaluate_device,
    freshness_score,
    score_device,
    select_window,
    trimmed_mean,
)


def steady_samples(count: int, accuracy: float = 5.0, start_age_ms: int = 0, period_ms: int = 1000):
    """count samples, newest start_age_ms old, one every period_ms."""
    return [Sample(NOW - start_age_ms - k * period_ms, accuracy, 0.0) for k in range(count)]


class TestSelectWindow:

    def test_dense_device_keeps_base_window(self) -> None:
        window_ms, window = select_window(steady_samples(30), NOW)
        assert window_ms == 45_000
        assert len(window) == 30

    def test_sparse_device_widens_once(self) -> None:
        samples = [
            Sample(NOW - 1_000, 5.0),
            Sample(NOW - 2_000, 5.0),
            Sample(NOW - 100_000, 5.0),
            Sample(NOW - 150_000, 5.0),
        ]
        # 2 samples in the base window -> ceil(5/2) = 3 -> 135 s
        window_ms, window = select_window(samples, NOW)
        assert window_ms == 135_000
        assert len(window) == 3

    def test_widening_is_capped(self) -> None:
        window_ms, _ = select_window([Sample(NOW - 1_000, 5.0)], NOW)
        assert window_ms == 180_000

    def test_silent_base_window_uses_fixed_scale(self) -> None:
        window_ms, window = select_window([Sample(NOW - 100_000, 5.0)], NOW)
        assert window_ms == 180_000
        assert len(window) == 1

    def test_future_samples_are_excluded(self) -> None:
        window_ms, window = select_window([Sample(NOW + 1, 5.0), Sample(NOW, 5.0)], NOW)
        assert window == [Sample(NOW, 5.0)]

    def test_does_not_modify_input(self) -> None:
        samples = [Sample(NOW - 200_000, 5.0), Sample(NOW - 1_000, 5.0)]
        copy = list(samples)
        select_window(samples, NOW)
        assert samples == copy


class TestSubScores:

    def test_trimmed_mean_drops_extremes(self) -> None:
        assert trimmed_mean([0.0] + [100.0] * 9) == pytest.approx(100)

    def test_trimmed_mean_small_sets_untrimmed(self) -> None:
        # n < 10 -> nothing trimmed
        assert trimmed_mean([0.0, 100.0]) == pytest.approx(50)
        assert trimmed_mean([10.0]) == pytest.approx(10)

    def test_trimmed_mean_unsorted_input(self) -> None:
        values = [50.0, 0.0, 50.0, 50.0, 100.0, 50.0, 50.0, 50.0, 50.0, 50.0]
        assert trimmed_mean(values) == pytest.approx(50)

    def test_trimmed_mean_empty(self) -> None:
        assert trimmed_mean([]) == 0

    @pytest.mark.parametrize("age,expected", [
        (0, 100), (10, 100), (35, 50), (60, 0), (600, 0),
    ])
    def test_freshness(self, age, expected) -> None:
        assert freshness_score(age) == pytest.approx(expected)

    @pytest.mark.parametrize("count,expected", [
        (45, 100),   # ratio 1.0
        (36, 100),   # ratio 0.8
        (27, 60),    # ratio 0.6
        (9, 0),      # ratio 0.2
    ])
    def test_availability_band(self, count, expected) -> None:
        assert availability_score(count, 45_000, 1.0) == pytest.approx(expected)

    @pytest.mark.parametrize("expected_hz", [0, -1])
    def test_availability_without_expected_rate(self, expected_hz) -> None:
        assert availability_score(1, 180_000, expected_hz) == 100


class TestScoreDevice:

    def test_no_samples_is_no_data(self) -> None:
        assert score_device([], NOW) is None

    def test_only_old_samples_is_no_data(self) -> None:
        breakdown = evaluate_device([Sample(NOW - 200_000, 5.0)], NOW)
        assert breakdown.score is None
        assert breakdown.sample_count == 0
        assert breakdown.window_ms == 180_000

    def test_only_future_samples_is_no_data(self) -> None:
        assert score_device([Sample(NOW + 5_000, 5.0)], NOW) is None

    def test_healthy_device_scores_100(self) -> None:
        assert score_device(steady_samples(45), NOW) == pytest.approx(100)

    def test_single_fresh_accurate_sample(self) -> None:
        breakdown = evaluate_device([Sample(NOW, 5.0)], NOW, expected_hz=10)
        assert breakdown.accuracy == 100
        assert breakdown.freshness == 100
        assert breakdown.availability == 0
        assert breakdown.score == pytest.approx(95)
        assert breakdown.score > 80

    def test_stale_latest_sample_discounts_availability(self) -> None:
        # 11 samples at 1 Hz, newest 35 s old, against an expected 0.25 Hz
        samples = steady_samples(11, start_age_ms=35_000)
        breakdown = evaluate_device(samples, NOW, expected_hz=0.25)
        assert breakdown.window_ms == 45_000
        assert breakdown.freshness == pytest.approx(50)
        assert breakdown.availability == pytest.approx(100)
        assert breakdown.effective_availability == pytest.approx(50)
        assert breakdown.score == pytest.approx(0.85 * 100 + 0.10 * 50 + 0.05 * 50)

    def test_silent_device_gets_one_more_chance(self) -> None:
        breakdown = evaluate_device([Sample(NOW - 100_000, 5.0)], NOW)
        assert breakdown.freshness == 0
        assert breakdown.score == pytest.approx(85)

    def test_missing_accuracy_drags_score_down(self) -> None:
        samples = [Sample(NOW - k * 1000, None) for k in range(45)]
        breakdown = evaluate_device(samples, NOW)
        assert breakdown.accuracy == 0
        assert breakdown.score == pytest.approx(15)

    def test_outlier_is_trimmed(self) -> None:
        samples = steady_samples(45)
        samples[10] = Sample(samples[10].timestamp, 500.0)
        assert score_device(samples, NOW) == pytest.approx(100)

    def test_sample_order_does_not_matter(self) -> None:
        samples = steady_samples(20, accuracy=30.0) + steady_samples(5, accuracy=60.0, start_age_ms=500)
        assert score_device(samples, NOW) == pytest.approx(score_device(list(reversed(samples)), NOW))

    def test_idempotent(self) -> None:
        samples = steady_samples(17, accuracy=25.0, start_age_ms=12_000)
        assert score_device(samples, NOW, 2.0) == score_device(samples, NOW, 2.0)
