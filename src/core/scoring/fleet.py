"""
Fleet verdict from per-device scores.
"""
import logging
import math
from typing import Iterable, List, Optional, Sequence

from core.models.device import Device
from core.models.fleet_verdict import FleetLabel, FleetVerdict
from core.scoring.device import score_device

logger = logging.getLogger(__name__)

RED_BELOW = 40.0
YELLOW_BELOW = 70.0

GOOD_MIN_P50 = 80.0
GOOD_MAX_RED = 0.05
GOOD_MAX_YELLOW = 0.20
POOR_BELOW_P50 = 50.0
POOR_MIN_RED = 0.15


def median(values: Sequence[float]) -> float:
    """Median of the values, 0 for an empty sequence."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def classify(p50: float, red_ratio: float, yellow_ratio: float, scored_count: int) -> FleetLabel:
    """
    Label a fleet. Checked in order, first match wins:
    Good, then Poor, then Moderate. A fleet with no scored device is Unknown.
    """
    if scored_count == 0:
        return FleetLabel.UNKNOWN
    if p50 >= GOOD_MIN_P50 and red_ratio < GOOD_MAX_RED and yellow_ratio < GOOD_MAX_YELLOW:
        return FleetLabel.GOOD
    if p50 < POOR_BELOW_P50 or red_ratio >= POOR_MIN_RED:
        return FleetLabel.POOR
    return FleetLabel.MODERATE


def verdict_from_scores(scores: Iterable[Optional[float]]) -> FleetVerdict:
    """
    Reduce device scores to a verdict. None entries (no data) are counted
    separately and left out of every statistic.
    """
    scored: List[float] = []
    no_data = 0
    for score in scores:
        if score is None or not math.isfinite(score):
            no_data += 1
        else:
            scored.append(score)

    p50 = median(scored)
    total = max(1, len(scored))
    red_ratio = sum(1 for s in scored if s < RED_BELOW) / total
    yellow_ratio = sum(1 for s in scored if RED_BELOW <= s < YELLOW_BELOW) / total
    label = classify(p50, red_ratio, yellow_ratio, len(scored))

    return FleetVerdict(
        p50=p50,
        red_ratio=red_ratio,
        yellow_ratio=yellow_ratio,
        label=label,
        scored_count=len(scored),
        no_data_count=no_data,
    )


def score_fleet(devices: Iterable[Device], now: float, expected_hz: float = 1.0) -> FleetVerdict:
    """
    Score every device independently and reduce the results to one verdict.

    Args:
        devices: Devices with their samples
        now: Evaluation time in epoch milliseconds
        expected_hz: Expected per-device sample rate in Hz

    Returns:
        FleetVerdict
    """
    verdict = verdict_from_scores(score_device(d.samples, now, expected_hz) for d in devices)
    logger.debug(
        f"Fleet scored: {verdict.scored_count} devices, {verdict.no_data_count} without data, "
        f"label={verdict.label.value}"
    )
    return verdict
