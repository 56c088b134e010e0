"""
Per-device score.

A device score combines, over a recent time window:
    A  trimmed mean (10% each side) of the per-sample accuracy scores
    F  freshness of the newest sample (100 up to 10 s old, 0 from 60 s)
    V  availability, received rate vs. expected rate (0 at 30%, 100 from 80%)
as S = 0.85*A + 0.10*F + 0.05*V*(F/100).

The window starts at 45 s and is widened once for sparse devices so that
roughly MIN_SAMPLES samples can be considered, capped at 3 minutes.
"""
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from core.models.fleet_verdict import DeviceBreakdown
from core.models.sample import Sample
from core.scoring.accuracy import score_sample

BASE_WINDOW_MS = 45_000
MIN_SAMPLES = 5
MAX_WINDOW_MS = 180_000
SILENT_SCALE = 4  # widening used when the base window is empty

TRIM_RATIO = 0.10

FRESH_AGE_S = 10.0
STALE_AGE_S = 60.0

AVAILABILITY_LOW = 0.3
AVAILABILITY_HIGH = 0.8

WEIGHT_ACCURACY = 0.85
WEIGHT_FRESHNESS = 0.10
WEIGHT_AVAILABILITY = 0.05


def _in_window(sample: Sample, now: float, window_ms: float) -> bool:
    # Future fixes and fixes older than the window are excluded
    dt = now - sample.timestamp
    return 0 <= dt <= window_ms


def select_window(samples: Iterable[Sample], now: float) -> Tuple[int, List[Sample]]:
    """
    Pick the evaluation window for one device.

    Single pass: count samples in the base window, derive one widening
    factor from that count, then filter with the widened window.

    Returns:
        (window_ms, samples inside the window)
    """
    samples = list(samples)
    count_base = sum(1 for s in samples if _in_window(s, now, BASE_WINDOW_MS))
    scale = math.ceil(MIN_SAMPLES / count_base) if count_base > 0 else SILENT_SCALE
    window_ms = min(MAX_WINDOW_MS, BASE_WINDOW_MS * max(1, scale))
    return window_ms, [s for s in samples if _in_window(s, now, window_ms)]


def trimmed_mean(values: Sequence[float], ratio: float = TRIM_RATIO) -> float:
    """Mean after dropping floor(n*ratio) values from each end. Empty input gives 0."""
    if not values:
        return 0.0
    ordered = sorted(values)
    trim = math.floor(len(ordered) * ratio)
    if len(ordered) > 2 * trim:
        ordered = ordered[trim:len(ordered) - trim]
    return sum(ordered) / len(ordered)


def freshness_score(age_s: float) -> float:
    if age_s <= FRESH_AGE_S:
        return 100.0
    if age_s >= STALE_AGE_S:
        return 0.0
    return 100.0 * (1 - (age_s - FRESH_AGE_S) / (STALE_AGE_S - FRESH_AGE_S))


def availability_score(sample_count: int, window_ms: float, expected_hz: float) -> float:
    """
    Score the received sample rate against the expected one.
    A non-positive expected_hz disables the penalty.
    """
    actual_hz = sample_count / (window_ms / 1000)
    ratio = actual_hz / expected_hz if expected_hz > 0 else 1.0
    band = (ratio - AVAILABILITY_LOW) / (AVAILABILITY_HIGH - AVAILABILITY_LOW)
    return 100.0 * max(0.0, min(1.0, band))


def evaluate_device(samples: Iterable[Sample], now: float, expected_hz: float = 1.0) -> DeviceBreakdown:
    """
    Compute the device score together with its sub-scores.

    Args:
        samples: Device samples, any order. Never modified.
        now: Evaluation time in epoch milliseconds
        expected_hz: Expected sample rate in Hz

    Returns:
        DeviceBreakdown, with score None when the window holds no sample
    """
    window_ms, window = select_window(samples, now)
    if not window:
        return DeviceBreakdown(
            score=None,
            accuracy=0.0,
            freshness=0.0,
            availability=0.0,
            effective_availability=0.0,
            window_ms=window_ms,
            sample_count=0,
        )

    accuracy = trimmed_mean([score_sample(s.accuracy_meters, s.speed_kmh or 0.0) for s in window])

    latest = max(s.timestamp for s in window)
    age_s = max(0.0, (now - latest) / 1000)
    freshness = freshness_score(age_s)

    availability = availability_score(len(window), window_ms, expected_hz)
    # Steady reporting does not earn full credit while the newest fix is stale
    effective_availability = availability * (freshness / 100)

    score = (
        WEIGHT_ACCURACY * accuracy
        + WEIGHT_FRESHNESS * freshness
        + WEIGHT_AVAILABILITY * effective_availability
    )
    return DeviceBreakdown(
        score=score,
        accuracy=accuracy,
        freshness=freshness,
        availability=availability,
        effective_availability=effective_availability,
        window_ms=window_ms,
        sample_count=len(window),
    )


def score_device(samples: Iterable[Sample], now: float, expected_hz: float = 1.0) -> Optional[float]:
    """Device score in [0, 100], or None when the device has no data in its window."""
    return evaluate_device(samples, now, expected_hz).score
