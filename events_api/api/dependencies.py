"""Request Dependencies — authentication gate, input validation, and store injection.

Invariants:
    - require_auth runs before any other dependency of a gated route
    - A missing or non-Bearer Authorization header is rejected before the verifier
      is resolved
    - Verified claims are attached to request.state.claims
    - Validation failures raise ValidationError before a store is touched
    - The record store is built per request from the request's DB session

Design Decisions:
    - Gate as a FastAPI dependency listed in the route decorator: a composable stage
      placed in front of the handler
    - Bodies and query strings validated by our own schema runner instead of FastAPI's
      parameter parsing, so every violation lands in one uniform 400 body
"""

import logging
from functools import lru_cache
from typing import Any, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from events_api.config import Settings, get_settings
from events_api.core.domain_types import CollectionName
from events_api.core.errors import MissingTokenError, ValidationError
from events_api.core.repository_protocols import RecordStore
from events_api.core.validation import validate_input
from events_api.infrastructure.database import get_db
from events_api.infrastructure.record_store import DocumentRecordStore
from events_api.infrastructure.token_verifier import JWTTokenVerifier, TokenVerifier
from events_api.services.event_service import EventService

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


# ─── Authentication Gate ─────────────────────────────────────────

@lru_cache
def _default_verifier() -> JWTTokenVerifier:
    return JWTTokenVerifier.from_settings(get_settings())


def get_token_verifier() -> TokenVerifier:
    return _default_verifier()


async def bearer_token(request: Request) -> str:
    """Extract the bearer token, or reject the request before any verifier is built."""
    header = request.headers.get("Authorization", "")
    token = header[len(_BEARER_PREFIX):].strip() if header.startswith(_BEARER_PREFIX) else ""
    if not token:
        logger.warning(
            "Unauthorized request: no bearer token",
            extra={"path": request.url.path},
        )
        raise MissingTokenError()
    return token


async def require_auth(
    request: Request,
    token: str = Depends(bearer_token),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> dict[str, Any]:
    """Reject the request unless it carries a verifiable bearer token."""
    claims = verifier.verify(token)
    request.state.claims = claims
    return claims


# ─── Input Validation ────────────────────────────────────────────

def _validated(payload: Any, schema: type, path: str):
    result = validate_input(payload, schema)
    if not result.valid:
        logger.warning(
            "Input validation failed",
            extra={"path": path, "validation_errors": result.errors},
        )
        raise ValidationError(result.errors)
    return result.data


def validated_body(schema: type) -> Callable:
    """Dependency factory: parse the JSON body and validate it against schema."""
    async def dependency(request: Request):
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        return _validated(payload, schema, request.url.path)
    return dependency


def validated_query(schema: type) -> Callable:
    """Dependency factory: validate the query string against schema."""
    async def dependency(request: Request):
        return _validated(dict(request.query_params), schema, request.url.path)
    return dependency


# ─── Store & Service ─────────────────────────────────────────────

async def get_event_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RecordStore:
    return DocumentRecordStore(db, CollectionName(settings.events_collection))


async def get_event_service(
    store: RecordStore = Depends(get_event_store),
) -> EventService:
    return EventService(store)
