"""Score result models for devices and fleets."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FleetLabel(Enum):
    """Fleet health label."""
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    UNKNOWN = "Unknown"  # no device had data in its window


@dataclass
class DeviceBreakdown:
    """
    Sub-scores behind one device score.
    score is None when no sample fell inside the evaluation window.
    """
    score: Optional[float]
    accuracy: float
    freshness: float
    availability: float
    effective_availability: float
    window_ms: int
    sample_count: int


@dataclass
class FleetVerdict:
    p50: float
    red_ratio: float
    yellow_ratio: float
    label: FleetLabel
    scored_count: int = 0
    no_data_count: int = 0
