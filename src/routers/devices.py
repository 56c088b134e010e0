from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from core.services.fleet_monitor import fleet_monitor
from schemas import DeviceList, DeviceScoreResponse, LocationRecordModel, SamplesList

router = APIRouter(prefix="/devices", tags=["devices"])

UNKNOWN_DEVICE_RESPONSE = {
    404: {
        "description": "Device has never reported.",
        "content": {
            "application/json": {
                "example": {"detail": "Unknown device: bus-42"}
            }
        }
    }
}


def _require_device(device_id: str) -> None:
    if not fleet_monitor.has_device(device_id):
        raise HTTPException(status_code=404, detail=f"Unknown device: {device_id}")


@router.get("", response_model=DeviceList)
async def get_devices() -> DeviceList:
    """Device ids, most recently updated first."""
    return DeviceList(list=fleet_monitor.device_ids())


@router.get("/{device_id}/samples", response_model=SamplesList, responses=UNKNOWN_DEVICE_RESPONSE)
async def get_device_samples(device_id: str) -> SamplesList:
    """Stored location records of a device, oldest first."""
    _require_device(device_id)
    records = fleet_monitor.get_records(device_id)
    return SamplesList(device_id=device_id, list=[LocationRecordModel.from_record(r) for r in records])


@router.get("/{device_id}/latest", response_model=LocationRecordModel, responses=UNKNOWN_DEVICE_RESPONSE)
async def get_device_latest(device_id: str) -> LocationRecordModel:
    """Most recent position of a device."""
    _require_device(device_id)
    return LocationRecordModel.from_record(fleet_monitor.get_latest(device_id))


@router.get("/{device_id}/score", response_model=DeviceScoreResponse, responses=UNKNOWN_DEVICE_RESPONSE)
async def get_device_score(
    device_id: str,
    now: Optional[float] = Query(None, description="Evaluation time in epoch milliseconds"),
    expected_hz: Optional[float] = Query(None, description="Expected sample rate in Hz"),
) -> DeviceScoreResponse:
    """
    Score one device with its sub-scores.
    `score` is null when no sample falls inside the (possibly widened) window.
    """
    _require_device(device_id)
    breakdown = fleet_monitor.evaluate_device(device_id, now=now, expected_hz=expected_hz)
    return DeviceScoreResponse.from_breakdown(device_id, breakdown)
