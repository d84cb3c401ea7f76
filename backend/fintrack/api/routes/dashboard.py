"""Dashboard Endpoints — transaction history and the combined dashboard view.

Invariants:
    - /transactions fails as a whole (structured error) like any other operation
    - / never fails on a data fetch: failed sections carry inline errors
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.dependencies import get_view_cache, provisioned_identity
from fintrack.core.domain_types import ExternalIdentity
from fintrack.infrastructure.database import get_db
from fintrack.infrastructure.view_cache import DASHBOARD_PATH, ViewCache
from fintrack.schemas.account import TransactionResponse
from fintrack.schemas.dashboard import DashboardResponse
from fintrack.services.dashboard import get_dashboard, list_recent_transactions

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def dashboard_route(
    identity: ExternalIdentity | None = Depends(provisioned_identity),
    db: AsyncSession = Depends(get_db),
):
    return await get_dashboard(db, identity)


@router.get("/transactions", response_model=list[TransactionResponse])
async def transactions_route(
    identity: ExternalIdentity | None = Depends(provisioned_identity),
    db: AsyncSession = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
):
    """Every transaction of the caller, most recent first."""
    if identity is None:
        return await list_recent_transactions(db, identity)
    return await cache.get_or_load(
        DASHBOARD_PATH, f"{identity.external_user_id}:transactions",
        lambda: list_recent_transactions(db, identity),
    )
