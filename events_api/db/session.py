"""Schema Bootstrap — creates tables directly for stores alembic does not manage.

Invariants:
    - Tables are created by alembic in deployments; create_schema is for the local
      development store and test fixtures
    - Idempotent: existing tables are left untouched
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from events_api.db.base import Base


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table known to Base.metadata."""
    import events_api.models  # noqa: F401  populate metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
