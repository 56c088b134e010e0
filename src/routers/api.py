from fastapi import APIRouter

from routers import devices, fleet, telemetry

router = APIRouter()

# include sub-routers
router.include_router(telemetry.router)
router.include_router(devices.router)
router.include_router(fleet.router)
