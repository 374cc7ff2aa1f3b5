import time
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from tours_bridge.api.dependencies import get_app_settings
from tours_bridge.core.config import Settings
from tours_bridge.core.logging import get_logger

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Health status response model."""
    ok: bool
    ts: int
    allowed: List[str]


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns liveness, the server time in epoch milliseconds and the allowed origins."
)
async def get_health(settings: Settings = Depends(get_app_settings)) -> HealthStatus:
    logger.debug("Health check requested")
    return HealthStatus(
        ok=True,
        ts=int(time.time() * 1000),
        allowed=list(settings.BACKEND_CORS_ORIGINS),
    )
