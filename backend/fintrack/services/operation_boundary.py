"""Operation Boundary — the single catch point of each service operation.

Invariants:
    - FintrackError is re-raised with the same type and a "<prefix>: " message
    - SQLAlchemyError is re-raised as StorageFailure with the same prefix
    - Anything else propagates untouched to the global handler
    - Every translated error is logged once, here
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError

from fintrack.core.errors import FintrackError, StorageFailure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def operation_boundary(prefix: str) -> AsyncIterator[None]:
    try:
        yield
    except FintrackError as e:
        wrapped = e.with_prefix(prefix)
        logger.warning(
            wrapped.message,
            extra={"error_code": e.code, "operation": prefix},
        )
        raise wrapped from e
    except SQLAlchemyError as e:
        logger.error(
            f"{prefix}: {e}",
            extra={"error_code": "STORAGE_FAILURE", "operation": prefix},
            exc_info=True,
        )
        raise StorageFailure(
            type(e).__name__, "execute",
        ).with_prefix(prefix) from e
