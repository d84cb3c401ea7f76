"""User Endpoint — resolves (and lazily provisions) the calling user."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.dependencies import current_identity
from fintrack.core.domain_types import ExternalIdentity
from fintrack.core.errors import Unauthenticated, UserNotFound
from fintrack.infrastructure.database import get_db
from fintrack.schemas.user import UserResponse
from fintrack.services.resolve_identity import check_user

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: ExternalIdentity | None = Depends(current_identity),
    db: AsyncSession = Depends(get_db),
):
    user = await check_user(db, identity)
    if user is None:
        if identity is None:
            raise Unauthenticated()
        raise UserNotFound(identity.external_user_id)
    return user.to_dict()
