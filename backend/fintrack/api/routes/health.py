"""Health Probe Endpoint — storage liveness and configuration presence.

Invariants:
    - 200 when overall_status is "healthy", 503 when "unhealthy"
    - 500 with overall_status "error" only when the probe itself raises
    - Never exposes configuration values, only variable names
"""

import logging
import os

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from fintrack.config import Settings, get_settings
from fintrack.core.domain_types import HealthStatus
from fintrack.core.env_check import check_environment_variables, utc_timestamp
from fintrack.infrastructure import database
from fintrack.services.health import perform_health_check

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(settings: Settings = Depends(get_settings)):
    """Full health probe: database connectivity plus required env vars."""
    try:
        result = await perform_health_check(
            database.db_manager, settings.environment,
        )
    except Exception as e:
        logger.error(f"Health check failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "timestamp": utc_timestamp(),
                "environment": settings.environment,
                "overall_status": HealthStatus.ERROR.value,
                "error": {"message": str(e), "name": type(e).__name__},
                "basic_env_check": check_environment_variables(os.environ),
            },
        )

    code = (
        status.HTTP_200_OK
        if result["overall_status"] == HealthStatus.HEALTHY.value
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(status_code=code, content=result)
