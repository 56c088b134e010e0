import logging
import time
from typing import List, Optional, Tuple

from core.config_loader import config_loader
from core.event_hub import event_hub, SAMPLE_RECEIVED, TELEMETRY_CLEARED
from core.models.circular_buffer import DeviceSampleStore
from core.models.fleet_verdict import DeviceBreakdown, FleetLabel, FleetVerdict
from core.models.location_record import LocationRecord
from core.scoring.device import evaluate_device
from core.scoring.fleet import score_fleet

logger = logging.getLogger(__name__)


def now_ms() -> float:
    return time.time() * 1000


class FleetMonitor:
    """
    Keeps the recent sample history of every device (fed by the EventHub)
    and scores it on demand.
    """
    def __init__(self, capacity: Optional[int] = None, max_devices: Optional[int] = None):
        self.store = DeviceSampleStore(
            capacity or config_loader.get_history_capacity(),
            max_devices or config_loader.get_max_devices(),
        )
        self.last_label: Optional[FleetLabel] = None
        event_hub.subscribe(SAMPLE_RECEIVED, self._on_sample)
        event_hub.subscribe(TELEMETRY_CLEARED, self._on_cleared)

    def _on_sample(self, topic, message: Tuple[str, LocationRecord]):
        device_id, record = message
        if not self.store.has_device(device_id):
            logger.info(f"New device reporting: {device_id}")
        evicted = self.store.append(device_id, record)
        if evicted is not None:
            logger.warning(f"Device limit ({self.store.max_devices}) reached, dropped history of {evicted}")

    def _on_cleared(self, topic, message):
        self.store.clear_all()
        self.last_label = None

    def device_ids(self) -> List[str]:
        return self.store.device_ids()

    def has_device(self, device_id: str) -> bool:
        return self.store.has_device(device_id)

    def get_records(self, device_id: str) -> List[LocationRecord]:
        return self.store.get_records(device_id)

    def get_latest(self, device_id: str) -> LocationRecord:
        return self.store.get_latest(device_id)

    def stored_count(self) -> int:
        return self.store.stored_count()

    def evaluate_device(self, device_id: str, now: Optional[float] = None,
                        expected_hz: Optional[float] = None) -> DeviceBreakdown:
        """Score one stored device. Raises KeyError for unknown devices."""
        samples = self.store.get_samples(device_id)
        return evaluate_device(
            samples,
            now if now is not None else now_ms(),
            expected_hz if expected_hz is not None else config_loader.get_expected_hz(),
        )

    def score_fleet(self, now: Optional[float] = None, expected_hz: Optional[float] = None) -> FleetVerdict:
        """Score every stored device and classify the fleet."""
        verdict = score_fleet(
            self.store.snapshot(),
            now if now is not None else now_ms(),
            expected_hz if expected_hz is not None else config_loader.get_expected_hz(),
        )
        if verdict.label != self.last_label:
            previous = self.last_label.value if self.last_label else "none"
            logger.info(f"Fleet label changed: {previous} -> {verdict.label.value} (p50={verdict.p50:.1f})")
            self.last_label = verdict.label
        return verdict


# Global instance
fleet_monitor = FleetMonitor()
