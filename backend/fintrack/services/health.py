"""Health Probe — storage liveness plus required-configuration presence.

Invariants:
    - perform_health_check never raises for storage or configuration failures;
      they are reported in database / env_variables
    - overall_status is "healthy" iff env_variables.isValid and database.connected
    - Read-only: a single SELECT 1, no writes
"""

import logging
import os
from typing import Mapping

from fintrack.core.env_check import (
    check_environment_variables, overall_status, utc_timestamp,
)
from fintrack.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


async def check_database_connection(manager: DatabaseSessionManager | None) -> dict:
    if manager is None:
        return {
            "connected": False,
            "error": {"message": "Database not initialized", "name": "RuntimeError"},
        }
    return await manager.probe()


async def perform_health_check(
    manager: DatabaseSessionManager | None,
    environment: str,
    env: Mapping[str, str] | None = None,
) -> dict:
    """Full probe result, shaped for GET /api/health."""
    env_status = check_environment_variables(os.environ if env is None else env)
    db_status = await check_database_connection(manager)

    result = {
        "timestamp": utc_timestamp(),
        "environment": environment,
        "env_variables": env_status,
        "database": db_status,
        "overall_status": overall_status(env_status, db_status).value,
    }
    if environment == "development":
        logger.info(f"Health check results: {result['overall_status']}")
    if env_status["missing"]:
        logger.warning(
            f"Missing required environment variables: {env_status['missing']}",
        )
    return result
