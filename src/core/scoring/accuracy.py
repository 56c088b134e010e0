"""
Per-sample accuracy scoring.

Maps a fix's horizontal error radius (meters) to a 0-100 score with three
piecewise-linear thresholds:
    error <= green          -> 100
    green < error <= yellow -> 100 down to 60
    yellow < error <= red   -> 60 down to 0
    error > red             -> 0
Fast movement widens all three thresholds (see speed_boost).

The yellow-to-red band falls with slope 60/(red - yellow) so the score is
continuous and reaches 0 exactly at red. The older 40/(red - yellow) slope
stopped at 20 there and then dropped straight to 0 past red.
"""
from typing import Optional, Tuple

from core.models.sample import to_finite_or_none

GREEN_M = 12.0
YELLOW_M = 35.0
RED_M = 80.0

# Speed relaxation (km/h)
BOOST_START_KMH = 50.0
BOOST_FULL_KMH = 90.0
BOOST_MIN_M = 5.0
BOOST_MAX_M = 10.0


def speed_boost(speed_kmh: float) -> float:
    """Meters added to every threshold for a given ground speed."""
    if speed_kmh >= BOOST_FULL_KMH:
        return BOOST_MAX_M
    if speed_kmh >= BOOST_START_KMH:
        # 50 km/h -> +5 m, approaching +10 m at 90 km/h
        span = BOOST_FULL_KMH - BOOST_START_KMH
        return BOOST_MIN_M + (speed_kmh - BOOST_START_KMH) / span * (BOOST_MAX_M - BOOST_MIN_M)
    return 0.0


def adjusted_thresholds(speed_kmh: float = 0.0) -> Tuple[float, float, float]:
    """Return the (green, yellow, red) thresholds in meters for a given speed."""
    boost = speed_boost(speed_kmh)
    return GREEN_M + boost, YELLOW_M + boost, RED_M + boost


def score_sample(error_meters: Optional[float], speed_kmh: Optional[float] = 0.0) -> float:
    """
    Score one fix from 0 to 100.

    Args:
        error_meters: Estimated horizontal error radius. Missing or non-finite scores 0.
        speed_kmh: Ground speed in km/h, None is treated as 0.

    Returns:
        Score in [0, 100]
    """
    error = to_finite_or_none(error_meters)
    if error is None:
        return 0.0

    speed = to_finite_or_none(speed_kmh) or 0.0
    g, y, r = adjusted_thresholds(speed)

    if error <= g:
        return 100.0
    if error <= y:
        return 100.0 - (error - g) * (40.0 / (y - g))
    if error <= r:
        # Reaches exactly 0 at the red threshold
        return 60.0 - (error - y) * (60.0 / (r - y))
    return 0.0
