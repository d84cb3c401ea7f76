"""API Dependencies — injection points for process-wide collaborators.

Invariants:
    - Identity provider and view cache are singletons configured once in the
      lifespan; tests replace them through app.dependency_overrides
    - provisioned_identity runs the fail-open check_user before the route body,
      so first-time callers get a User row lazily
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.domain_types import ExternalIdentity
from fintrack.core.repository_protocols import IdentityProvider
from fintrack.infrastructure.database import get_db
from fintrack.infrastructure.view_cache import ViewCache
from fintrack.services.resolve_identity import check_user

_identity_provider: IdentityProvider | None = None
_view_cache: ViewCache | None = None


def configure(identity_provider: IdentityProvider, view_cache: ViewCache) -> None:
    global _identity_provider, _view_cache
    _identity_provider = identity_provider
    _view_cache = view_cache


def get_identity_provider() -> IdentityProvider:
    if _identity_provider is None:
        raise RuntimeError("Identity provider not initialized")
    return _identity_provider


def get_view_cache() -> ViewCache:
    if _view_cache is None:
        raise RuntimeError("View cache not initialized")
    return _view_cache


async def current_identity(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> ExternalIdentity | None:
    return await provider.current_identity(request)


async def provisioned_identity(
    identity: ExternalIdentity | None = Depends(current_identity),
    db: AsyncSession = Depends(get_db),
) -> ExternalIdentity | None:
    await check_user(db, identity)
    return identity
