from fastapi import FastAPI
from pydantic_settings import BaseSettings, SettingsConfigDict
from contextlib import asynccontextmanager
from typing import Optional
import logging

from routers.api import router as api_router
from schemas import AppHealthOK
from core.service_manager import service_manager

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings. Dashboard tunables left unset fall back to
    config/dashboard_config.json; e.g. DASHBOARD_INTERVAL_MS=500 overrides it.
    """
    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    app_name: str = "Temperature Dashboard API"
    debug: bool = True
    window_capacity: Optional[int] = None
    interval_ms: Optional[int] = None
    value_min: Optional[float] = None
    value_max: Optional[float] = None

    def dashboard_overrides(self) -> dict:
        return {
            "window_capacity": self.window_capacity,
            "interval_ms": self.interval_ms,
            "value_min": self.value_min,
            "value_max": self.value_max,
        }


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup/shutdown without deprecated on_event."""
    try:
        logger.info("Starting dashboard services")
        await service_manager.start_services(settings.dashboard_overrides())
    except Exception as e:
        # Startup failures are fatal for the session
        logger.error("Failed to start dashboard services: %s", e)
        raise

    try:
        yield
    finally:
        logger.info("Stopping dashboard services")
        service_manager.stop_services()


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
