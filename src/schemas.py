from typing import List, Optional
from pydantic import BaseModel, Field
from core.models.device import Device
from core.models.fleet_verdict import DeviceBreakdown, FleetLabel, FleetVerdict
from core.models.location_record import LocationRecord
from core.models.sample import Sample


class AppHealthOK(BaseModel):
    status: str
    app: str


class MessageResponse(BaseModel):
    message: str


class SampleModel(BaseModel):
    timestamp: float = Field(..., description="Fix time in epoch milliseconds")
    accuracy_meters: Optional[float] = None
    speed_kmh: Optional[float] = None

    def to_sample(self) -> Sample:
        return Sample(self.timestamp, self.accuracy_meters, self.speed_kmh)


class LocationRecordModel(BaseModel):
    id: str
    timestamp: float = Field(..., description="Fix time in epoch milliseconds")
    accuracy_meters: Optional[float] = None
    speed_kmh: Optional[float] = None
    latitude: float
    longitude: float
    state: Optional[str] = None

    @classmethod
    def from_record(cls, record: LocationRecord) -> "LocationRecordModel":
        return cls(
            id=record.id,
            timestamp=record.sample.timestamp,
            accuracy_meters=record.sample.accuracy_meters,
            speed_kmh=record.sample.speed_kmh,
            latitude=record.latitude,
            longitude=record.longitude,
            state=record.state,
        )


class SamplesList(BaseModel):
    device_id: str
    list: List[LocationRecordModel]


class DeviceModel(BaseModel):
    id: str
    samples: List[SampleModel] = []

    def to_device(self) -> Device:
        return Device(id=self.id, samples=[s.to_sample() for s in self.samples])


class DeviceList(BaseModel):
    list: List[str]


class TelemetryStatus(BaseModel):
    message_count: int
    device_count: int
    stored_count: int


class IngestResponse(BaseModel):
    accepted: int


class DeviceScoreResponse(BaseModel):
    device_id: str
    score: Optional[float] = Field(None, description="null when the device has no data in its window")
    accuracy: float
    freshness: float
    availability: float
    effective_availability: float
    window_ms: int
    sample_count: int

    @classmethod
    def from_breakdown(cls, device_id: str, breakdown: DeviceBreakdown) -> "DeviceScoreResponse":
        return cls(
            device_id=device_id,
            score=breakdown.score,
            accuracy=breakdown.accuracy,
            freshness=breakdown.freshness,
            availability=breakdown.availability,
            effective_availability=breakdown.effective_availability,
            window_ms=breakdown.window_ms,
            sample_count=breakdown.sample_count,
        )


class FleetScoreRequest(BaseModel):
    now: Optional[float] = Field(None, description="Evaluation time in epoch milliseconds, defaults to server time")
    expected_hz: Optional[float] = None
    devices: List[DeviceModel] = []


class FleetVerdictResponse(BaseModel):
    p50: float
    red_ratio: float
    yellow_ratio: float
    label: FleetLabel
    scored_count: int
    no_data_count: int

    @classmethod
    def from_verdict(cls, verdict: FleetVerdict) -> "FleetVerdictResponse":
        return cls(
            p50=verdict.p50,
            red_ratio=verdict.red_ratio,
            yellow_ratio=verdict.yellow_ratio,
            label=verdict.label,
            scored_count=verdict.scored_count,
            no_data_count=verdict.no_data_count,
        )
