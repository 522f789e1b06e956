"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - use_local_store only changes the store connection target, never the API contract

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Local store defaults to a SQLite file so the API runs without a database server
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from events_api.core.domain_types import EVENTS_COLLECTION


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    database_url: str = (
        "postgresql+asyncpg://events:events@db:5432/events"
    )
    local_database_url: str = "sqlite+aiosqlite:///./events-local.db"
    use_local_store: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs use postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    events_collection: str = EVENTS_COLLECTION

    # Auth — HS256 shared secret, or RS256 keys from a JWKS endpoint
    auth_jwt_secret: str = ""
    auth_jwks_url: str = ""
    auth_algorithms: list[str] = ["HS256"]
    auth_audience: str | None = None
    auth_issuer: str | None = None
    auth_required_claim: str | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def store_url(self) -> str:
        return self.local_database_url if self.use_local_store else self.database_url


@lru_cache
def get_settings() -> Settings:
    return Settings()
