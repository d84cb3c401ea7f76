"""Seed Endpoint — fills the caller's default account with sample transactions.

Invariants:
    - 404 unless settings.enable_seed is set
    - Only ever touches the caller's own default account
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.dependencies import get_view_cache, provisioned_identity
from fintrack.config import Settings, get_settings
from fintrack.core.domain_types import ExternalIdentity
from fintrack.infrastructure.database import get_db
from fintrack.infrastructure.view_cache import DASHBOARD_PATH, ViewCache
from fintrack.services.accounts import get_default_account
from fintrack.services.operation_boundary import operation_boundary
from fintrack.services.resolve_identity import require_user
from fintrack.services.seed import seed_transactions

router = APIRouter(prefix="/api/seed", tags=["seed"])


@router.post("")
async def seed_route(
    identity: ExternalIdentity | None = Depends(provisioned_identity),
    db: AsyncSession = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
    settings: Settings = Depends(get_settings),
):
    if not settings.enable_seed:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Not Found")

    async with operation_boundary("Failed to seed transactions"):
        owner = await require_user(db, identity)
        account = await get_default_account(db, owner.id)
    if account is None:
        return {"success": False, "error": "No default account to seed"}

    result = await seed_transactions(db, owner.id, account.id)
    if result["success"]:
        cache.revalidate_path(DASHBOARD_PATH)
    return result
