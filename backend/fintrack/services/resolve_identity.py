"""Identity Resolution — maps a verified external identity to an internal User.

Invariants:
    - ensure_user is idempotent: concurrent first requests for one identity end
      with one row, and losers of the insert race return the winner's row
    - check_user never raises: any failure is logged and yields None
    - require_user never provisions: no identity -> Unauthenticated,
      no row -> UserNotFound
    - Secrets are never logged, only whether they are configured

Design Decisions:
    - Insert inside a SAVEPOINT so a unique violation on external_user_id rolls
      back only the insert, leaving the session usable for the re-read
    - check_user keeps the fail-open contract of the page layout: callers must
      handle None explicitly
"""

import logging
import os

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.config import get_settings
from fintrack.core.domain_types import ExternalIdentity
from fintrack.core.errors import Unauthenticated, UserNotFound
from fintrack.core.identity_rules import build_user_fields
from fintrack.models.user import User

logger = logging.getLogger(__name__)


async def find_user(db: AsyncSession, external_user_id: str) -> User | None:
    result = await db.execute(
        select(User).where(User.external_user_id == external_user_id),
    )
    return result.scalar_one_or_none()


async def ensure_user(db: AsyncSession, identity: ExternalIdentity | None) -> User:
    """Return the caller's User, provisioning it on first sight."""
    if identity is None:
        raise Unauthenticated()

    existing = await find_user(db, identity.external_user_id)
    if existing:
        return existing

    fields = build_user_fields(identity)
    try:
        async with db.begin_nested():
            user = User(**fields)
            db.add(user)
    except IntegrityError:
        winner = await find_user(db, identity.external_user_id)
        if winner is None:
            # Violation on another column (e.g. email owned by a different identity)
            raise
        logger.info(
            "Concurrent provisioning resolved to existing user",
            extra={"user_id": str(winner.id)},
        )
        return winner

    await db.commit()
    logger.info(
        "Provisioned new user",
        extra={"user_id": str(user.id), "external_user_id": identity.external_user_id},
    )
    return user


async def check_user(db: AsyncSession, identity: ExternalIdentity | None) -> User | None:
    """Fail-open variant of ensure_user: None instead of any exception."""
    if identity is None:
        logger.info("No authenticated user found")
        return None
    try:
        await db.execute(text("SELECT 1"))
        return await ensure_user(db, identity)
    except Exception as e:
        await db.rollback()
        logger.error(
            f"User check failed: {type(e).__name__}: {e}",
            extra={
                "external_user_id": identity.external_user_id,
                "error_code": getattr(e, "code", None),
            },
            exc_info=True,
        )
        settings = get_settings()
        logger.error(
            "Environment check: DATABASE_URL=%s CLERK_SECRET_KEY=%s "
            "CLERK_PUBLISHABLE_KEY=%s",
            bool(os.environ.get("DATABASE_URL")),
            bool(settings.clerk_secret_key),
            bool(settings.clerk_publishable_key),
        )
        return None


async def require_user(db: AsyncSession, identity: ExternalIdentity | None) -> User:
    """Resolve an existing User for account/dashboard operations."""
    if identity is None:
        raise Unauthenticated()
    user = await find_user(db, identity.external_user_id)
    if user is None:
        raise UserNotFound(identity.external_user_id)
    return user
