from fastapi import FastAPI
from pydantic_settings import BaseSettings
from contextlib import asynccontextmanager
import logging

from routers.api import router as api_router
from schemas import AppHealthOK
from core.config_loader import config_loader

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    app_name: str = "Fleet Health API"
    debug: bool = True
    # Expected per-device sample rate (Hz) used when a request does not give one.
    # The EXPECTED_HZ environment variable overrides the config file.
    expected_hz: float = config_loader.get_expected_hz()


settings = Settings()
config_loader.set_expected_hz(settings.expected_hz)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s (expected rate %.2f Hz)", settings.app_name, settings.expected_hz)
    yield
    logger.info("Stopping %s", settings.app_name)


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)


@app.get("/", tags=["meta"])
async def read_root() -> dict[str, str]:
    return {"message": settings.app_name}


@app.get("/health", tags=["meta"], response_model=AppHealthOK)
async def healthcheck() -> AppHealthOK:
    return AppHealthOK(status="ok", app=settings.app_name)


# mount API router under /api
app.include_router(api_router, prefix="/api")
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
