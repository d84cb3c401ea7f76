"""Account Endpoints — create an account, list the caller's accounts.

Invariants:
    - Listing goes through the view cache under the dashboard path, so a
      successful creation is visible on the very next read
    - Unauthenticated callers are never served from the cache
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.dependencies import get_view_cache, provisioned_identity
from fintrack.core.domain_types import ExternalIdentity
from fintrack.infrastructure.database import get_db
from fintrack.infrastructure.view_cache import DASHBOARD_PATH, ViewCache
from fintrack.schemas.account import AccountCreate, AccountResponse
from fintrack.services.accounts import create_account
from fintrack.services.dashboard import list_accounts

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.post(
    "", response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account_route(
    body: AccountCreate,
    identity: ExternalIdentity | None = Depends(provisioned_identity),
    db: AsyncSession = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
):
    """Create an account. The user's first account is always the default."""
    return await create_account(db, identity, body, cache)


@router.get("", response_model=list[AccountResponse])
async def list_accounts_route(
    identity: ExternalIdentity | None = Depends(provisioned_identity),
    db: AsyncSession = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
):
    """The caller's accounts, newest first, with transaction counts."""
    if identity is None:
        return await list_accounts(db, identity)
    return await cache.get_or_load(
        DASHBOARD_PATH, f"{identity.external_user_id}:accounts",
        lambda: list_accounts(db, identity),
    )
