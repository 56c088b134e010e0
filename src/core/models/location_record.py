"""
Stored form of a received location update.
"""
from dataclasses import dataclass
from typing import Optional

from core.models.sample import Sample


@dataclass(frozen=True)
class LocationRecord:
    """
    A location update as kept in history: the scoring Sample plus where
    the device was and what it reported doing.
    """
    id: str
    sample: Sample
    latitude: float
    longitude: float
    state: Optional[str] = None
