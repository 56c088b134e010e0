from typing import List
from fastapi import APIRouter, HTTPException
from core.models.location_update import LocationUpdate
from core.services.telemetry_manager import telemetry_manager, UnsupportedMessageError
from core.services.fleet_monitor import fleet_monitor
from schemas import IngestResponse, TelemetryStatus

router = APIRouter(prefix="/telemetry", tags=["telemetry"])

UNSUPPORTED_TYPE_RESPONSE = {
    400: {
        "description": "Message is not a location update.",
        "content": {
            "application/json": {
                "example": {"detail": "Unsupported message type: heartbeat"}
            }
        }
    }
}


@router.post("/location", response_model=IngestResponse, responses=UNSUPPORTED_TYPE_RESPONSE)
async def post_location(update: LocationUpdate) -> IngestResponse:
    """
    Ingest one location update.

    `coords.speed` is in meters/second and is stored as km/h.
    `coords.accuracy` and `coords.speed` may be null.
    """
    try:
        telemetry_manager.ingest(update)
    except UnsupportedMessageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return IngestResponse(accepted=1)


@router.post("/batch", response_model=IngestResponse, responses=UNSUPPORTED_TYPE_RESPONSE)
async def post_batch(updates: List[LocationUpdate]) -> IngestResponse:
    """
    Ingest several location updates. Nothing is stored if any message is not a location update.
    """
    try:
        accepted = telemetry_manager.ingest_many(updates)
    except UnsupportedMessageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return IngestResponse(accepted=accepted)


@router.get("/status", response_model=TelemetryStatus)
async def get_status() -> TelemetryStatus:
    return TelemetryStatus(
        message_count=telemetry_manager.message_count,
        device_count=len(fleet_monitor.device_ids()),
        stored_count=fleet_monitor.stored_count(),
    )


@router.delete("", status_code=204)
async def clear_telemetry() -> None:
    """Drop all stored samples, device ids and counters."""
    telemetry_manager.clear()
