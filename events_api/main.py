"""Events API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EventsApiError → {success: false, ...} JSON responses
    - CORS configured from settings (not hardcoded)
    - Store connection initialized on startup via lifespan context manager
    - Startup fails when no token verification key (secret or JWKS URL) is configured

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - use_local_store selects the local development store and creates its table on
      startup; the production store is migrated by alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from events_api.api.dependencies import get_token_verifier
from events_api.api.error_handlers import register_error_handlers
from events_api.api.routes import events, health
from events_api.config import get_settings
from events_api.db.session import create_schema
from events_api.infrastructure.database import close_db, init_db
from events_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    get_token_verifier()
    manager = init_db(
        settings.store_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.use_local_store:
        await create_schema(manager.engine)
        logger.info("Connected to local development store")
    else:
        logger.info("Connected to production store")
    logger.info("Events API started")
    yield
    await close_db()
    logger.info("Events API shutting down")


app = FastAPI(
    title="Events API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(events.router)

register_error_handlers(app)
