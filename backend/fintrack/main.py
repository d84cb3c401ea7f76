"""Fintrack API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FintrackError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, identity provider and view cache initialized once in the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: FintrackError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fintrack.api import dependencies
from fintrack.api.error_handlers import register_error_handlers
from fintrack.api.routes import accounts, dashboard, health, seed, users
from fintrack.config import get_settings
from fintrack.infrastructure.database import close_db, init_db
from fintrack.infrastructure.identity_provider import JWTIdentityProvider
from fintrack.infrastructure.observability import setup_logging
from fintrack.infrastructure.view_cache import ViewCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    dependencies.configure(
        identity_provider=JWTIdentityProvider(
            settings.identity_jwt_key,
            settings.identity_jwt_algorithms,
            issuer=settings.identity_jwt_issuer,
            leeway_seconds=settings.identity_jwt_leeway_seconds,
        ),
        view_cache=ViewCache(ttl_seconds=settings.view_cache_ttl_seconds),
    )
    logger.info(
        "Fintrack API started",
        extra={"environment": settings.environment},
    )
    yield
    await close_db()
    logger.info("Fintrack API shutting down")


app = FastAPI(
    title="Fintrack API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(accounts.router)
app.include_router(dashboard.router)
app.include_router(seed.router)

register_error_handlers(app)
