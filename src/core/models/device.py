from dataclasses import dataclass, field
from typing import List

from core.models.sample import Sample


@dataclass
class Device:
    """A device id and the samples it has reported (any order)."""
    id: str
    samples: List[Sample] = field(default_factory=list)
