"""
CircularBuffer for bounded per-device location history with O(1) insertion.
DeviceSampleStore keeps one buffer per device id, bounded in both samples
per device and number of devices.
"""
from typing import Dict, List, Optional

from core.models.device import Device
from core.models.location_record import LocationRecord
from core.models.sample import Sample


class CircularBuffer:
    """
    Fixed-capacity circular buffer of location records.
    - O(1) insertion at the end
    - O(1) random access
    - Overwrites oldest when full
    - Storage grows with use up to capacity, nothing is preallocated
    """

    __slots__ = ('capacity', 'buffer', 'write_index', 'count', '_mask')

    def __init__(self, capacity: int):
        """
        Initialize circular buffer.

        Args:
            capacity: Maximum number of records to keep
        """
        if capacity <= 0:
            raise ValueError(f"Invalid capacity {capacity}")
        self.capacity = capacity
        self.buffer: List[LocationRecord] = []
        self.write_index = 0  # Next position to write
        self.count = 0  # Number of valid entries (0 to capacity)
        # Precompute mask for power-of-2 capacities (faster modulo)
        self._mask = capacity - 1 if (capacity & (capacity - 1)) == 0 else None

    def _wrap(self, index: int) -> int:
        if self._mask is not None:
            return index & self._mask
        return index % self.capacity

    def append(self, record: LocationRecord) -> None:
        """Add a record to the buffer. O(1)."""
        if self.count < self.capacity:
            # Still filling: physical index == logical index
            self.buffer.append(record)
            self.count += 1
            self.write_index = self._wrap(self.count)
        else:
            self.buffer[self.write_index] = record
            self.write_index = self._wrap(self.write_index + 1)

    def get(self, index: int) -> LocationRecord:
        """
        Get item at logical index (0 = oldest, count-1 = newest).
        O(1) access.
        """
        if index < 0 or index >= self.count:
            raise IndexError(f"Index {index} out of range [0, {self.count})")
        return self.buffer[self._wrap(self.write_index - self.count + index)]

    def latest(self) -> Optional[LocationRecord]:
        return self.get(self.count - 1) if self.count else None

    def get_all(self) -> List[LocationRecord]:
        """Get all valid entries in insertion order."""
        return [self.get(i) for i in range(self.count)]

    def is_full(self) -> bool:
        return self.count == self.capacity

    def size(self) -> int:
        return self.count

    def clear(self) -> None:
        """Clear all entries."""
        self.buffer = []
        self.write_index = 0
        self.count = 0


class DeviceSampleStore:
    """
    Location history for every device.
    Each device keeps at most `capacity` records and at most `max_devices`
    devices are kept; a new device beyond that evicts the one that has
    been silent the longest.
    """

    __slots__ = ('capacity', 'max_devices', 'buffers', '_recent')

    def __init__(self, capacity: int, max_devices: int):
        if capacity <= 0:
            raise ValueError(f"Invalid capacity {capacity}")
        if max_devices <= 0:
            raise ValueError(f"Invalid max_devices {max_devices}")
        self.capacity = capacity
        self.max_devices = max_devices
        self.buffers: Dict[str, CircularBuffer] = {}
        # Device ids, most recently updated last
        self._recent: Dict[str, None] = {}

    def append(self, device_id: str, record: LocationRecord) -> Optional[str]:
        """
        Store a record. Returns the id of the device evicted to make room, if any.
        """
        evicted = None
        buffer = self.buffers.get(device_id)
        if buffer is None:
            if len(self.buffers) >= self.max_devices:
                evicted = next(iter(self._recent))
                self._remove(evicted)
            buffer = CircularBuffer(self.capacity)
            self.buffers[device_id] = buffer
        buffer.append(record)
        self._recent.pop(device_id, None)
        self._recent[device_id] = None
        return evicted

    def _remove(self, device_id: str) -> None:
        del self.buffers[device_id]
        del self._recent[device_id]

    def has_device(self, device_id: str) -> bool:
        return device_id in self.buffers

    def device_ids(self) -> List[str]:
        """Device ids, most recently updated first."""
        return list(reversed(self._recent))

    def get_records(self, device_id: str) -> List[LocationRecord]:
        """Records of a device, oldest first. Raises KeyError for unknown devices."""
        return self.buffers[device_id].get_all()

    def get_latest(self, device_id: str) -> LocationRecord:
        """Newest record of a device. Raises KeyError for unknown devices."""
        return self.buffers[device_id].latest()

    def get_samples(self, device_id: str) -> List[Sample]:
        return [r.sample for r in self.get_records(device_id)]

    def stored_count(self) -> int:
        """Total number of records held across all devices."""
        return sum(b.size() for b in self.buffers.values())

    def snapshot(self) -> List[Device]:
        """Copy of the current history as Device objects."""
        return [Device(id=device_id, samples=self.get_samples(device_id)) for device_id in self.device_ids()]

    def clear_all(self) -> None:
        self.buffers.clear()
        self._recent.clear()
