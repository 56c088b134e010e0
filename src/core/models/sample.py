"""
Telemetry sample model.
"""
import math
from dataclasses import dataclass
from typing import Any, Optional


def to_finite_or_none(value: Any) -> Optional[float]:
    """Return value as a finite float, or None when missing, NaN, infinite or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class Sample:
    """
    One position fix reported by a device.
    timestamp is the fix time in epoch milliseconds, not the receipt time.
    """
    timestamp: float
    accuracy_meters: Optional[float] = None
    speed_kmh: Optional[float] = None

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "accuracy_meters", to_finite_or_none(self.accuracy_meters))
        object.__setattr__(self, "speed_kmh", to_finite_or_none(self.speed_kmh))
