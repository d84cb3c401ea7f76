"""Environment Check — presence-only audit of required configuration.

Invariants:
    - Values are never returned or logged, only variable names
    - A variable counts as present when set to a non-empty string
    - isValid is True iff no required variable is missing
    - Required variables with aliases count as present if any alias is set;
      the canonical (first) name is the one reported
"""

from datetime import datetime, timezone
from typing import Mapping

from fintrack.core.domain_types import HealthStatus

# Canonical name first, accepted aliases after it
REQUIRED_ENV_VARS: tuple[tuple[str, ...], ...] = (
    ("NEXT_PUBLIC_CLERK_PUBLISHABLE_KEY", "CLERK_PUBLISHABLE_KEY"),
    ("CLERK_SECRET_KEY",),
    ("DATABASE_URL",),
)

OPTIONAL_ENV_VARS: tuple[str, ...] = (
    "ARCJET_KEY",
    "RESEND_API_KEY",
    "GOOGLE_GENERATIVE_AI_API_KEY",
)


def check_environment_variables(env: Mapping[str, str]) -> dict:
    """Report which required/optional variables are set. Pure."""
    present: list[str] = []
    missing: list[str] = []
    optional: list[str] = []

    for names in REQUIRED_ENV_VARS:
        if any(env.get(name) for name in names):
            present.append(names[0])
        else:
            missing.append(names[0])

    for name in OPTIONAL_ENV_VARS:
        if env.get(name):
            optional.append(name)

    return {
        "present": present,
        "optional": optional,
        "missing": missing,
        "isValid": not missing,
    }


def overall_status(env_status: dict, db_status: dict) -> HealthStatus:
    if env_status["isValid"] and db_status["connected"]:
        return HealthStatus.HEALTHY
    return HealthStatus.UNHEALTHY


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()
