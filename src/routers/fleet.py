import logging
from typing import Optional
from fastapi import APIRouter, Query
from core.config_loader import config_loader
from core.scoring.fleet import score_fleet
from core.services.fleet_monitor import fleet_monitor, now_ms
from schemas import FleetScoreRequest, FleetVerdictResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fleet", tags=["fleet"])


@router.get("/score", response_model=FleetVerdictResponse)
async def get_fleet_score(
    now: Optional[float] = Query(None, description="Evaluation time in epoch milliseconds"),
    expected_hz: Optional[float] = Query(None, description="Expected sample rate in Hz"),
) -> FleetVerdictResponse:
    """
    Classify the fleet from the stored telemetry.

    Labels:
    - **Good**: median >= 80, under 5% red and under 20% yellow devices
    - **Poor**: median < 50 or at least 15% red devices
    - **Moderate**: anything else
    - **Unknown**: no device has data in its window
    """
    verdict = fleet_monitor.score_fleet(now=now, expected_hz=expected_hz)
    return FleetVerdictResponse.from_verdict(verdict)


@router.post("/score", response_model=FleetVerdictResponse)
async def post_fleet_score(request: FleetScoreRequest) -> FleetVerdictResponse:
    """
    Classify a posted snapshot of devices. Nothing is stored.
    """
    devices = [d.to_device() for d in request.devices]
    now = request.now if request.now is not None else now_ms()
    expected_hz = request.expected_hz if request.expected_hz is not None else config_loader.get_expected_hz()
    logger.debug(f"Scoring posted snapshot of {len(devices)} devices")
    verdict = score_fleet(devices, now, expected_hz)
    return FleetVerdictResponse.from_verdict(verdict)
