"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Identity-provider keys are optional here; the health probe reports them

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - NODE_ENV accepted as an alias of ENVIRONMENT for parity with the web frontend
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Database
    database_url: str = (
        "postgresql+asyncpg://fintrack:fintrack@db:5432/fintrack"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Runtime
    environment: str = Field(
        "development",
        validation_alias=AliasChoices("environment", "node_env"),
    )

    # Identity provider
    clerk_secret_key: str | None = None
    clerk_publishable_key: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "clerk_publishable_key", "next_public_clerk_publishable_key",
        ),
    )
    identity_jwt_key: str | None = None
    identity_jwt_algorithms: list[str] = ["RS256"]
    identity_jwt_issuer: str | None = None
    identity_jwt_leeway_seconds: int = 5

    # Dashboard view cache
    view_cache_ttl_seconds: float = 60.0

    # Development seed endpoint
    enable_seed: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
