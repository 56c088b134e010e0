import logging
from typing import Iterable

from core.event_hub import event_hub, SAMPLE_RECEIVED, TELEMETRY_CLEARED
from core.models.location_record import LocationRecord
from core.models.location_update import LocationUpdate
from core.models.sample import Sample, to_finite_or_none

logger = logging.getLogger(__name__)

LOCATION_UPDATE_TYPE = "location_update"
MS_TO_KMH = 3.6


class UnsupportedMessageError(ValueError):
    """Raised for telemetry messages that are not location updates."""


def to_sample(update: LocationUpdate) -> Sample:
    """Convert a location update to a Sample (speed m/s -> km/h)."""
    speed_ms = to_finite_or_none(update.coords.speed)
    return Sample(
        timestamp=update.timestamp,
        accuracy_meters=update.coords.accuracy,
        speed_kmh=speed_ms * MS_TO_KMH if speed_ms is not None else None,
    )


def to_record(update: LocationUpdate) -> LocationRecord:
    """Keep position, state and message id next to the scoring Sample."""
    return LocationRecord(
        id=update.id,
        sample=to_sample(update),
        latitude=update.coords.latitude,
        longitude=update.coords.longitude,
        state=update.state,
    )


class TelemetryManager:
    """
    Entry point for incoming device telemetry.
    Converts location updates to samples and publishes them on the EventHub.
    """
    def __init__(self):
        self.message_count = 0

    def ingest(self, update: LocationUpdate) -> LocationRecord:
        if update.type != LOCATION_UPDATE_TYPE:
            logger.warning(f"Dropping telemetry message of type {update.type!r} from {update.device}")
            raise UnsupportedMessageError(f"Unsupported message type: {update.type}")

        record = to_record(update)
        if record.sample.accuracy_meters is None:
            logger.debug(f"Location update {update.id} from {update.device} has no accuracy")
        self.message_count += 1
        event_hub.send_all_on_topic(SAMPLE_RECEIVED, (update.device, record))
        return record

    def ingest_many(self, updates: Iterable[LocationUpdate]) -> int:
        """Ingest a batch. All messages are validated before any is published."""
        updates = list(updates)
        for update in updates:
            if update.type != LOCATION_UPDATE_TYPE:
                raise UnsupportedMessageError(f"Unsupported message type: {update.type}")
        for update in updates:
            self.ingest(update)
        return len(updates)

    def clear(self):
        self.message_count = 0
        event_hub.send_all_on_topic(TELEMETRY_CLEARED, None)
        logger.info("Telemetry history cleared")


# Global instance
telemetry_manager = TelemetryManager()
