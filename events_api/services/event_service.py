"""Event Service — the six event operations composed over a RecordStore.

Invariants:
    - Depends only on the RecordStore protocol (injected), never on a global client
    - Inputs arrive already validated; the service never re-validates
    - Exactly one store call per operation; no retries
    - create stamps createdAt and updatedAt; update strips id and re-stamps updatedAt
    - Missing ids raise NotFoundError; store failures surface as StoreError

Design Decisions:
    - Service returns plain records and ids; HTTP status mapping stays in the route
"""

import logging

from events_api.core.domain_types import EventId, EventType
from events_api.core.errors import NotFoundError
from events_api.core.event_query import build_filter_conditions, strip_immutable_fields
from events_api.core.repository_protocols import RecordStore, SERVER_TIMESTAMP
from events_api.schemas.event import (
    EventCreate, EventFilterQuery, EventUpdate,
)

logger = logging.getLogger(__name__)


class EventService:
    """Event catalog operations."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def create_event(self, payload: EventCreate) -> EventId:
        record = {
            **payload.to_document(),
            "createdAt": SERVER_TIMESTAMP,
            "updatedAt": SERVER_TIMESTAMP,
        }
        event_id = EventId(await self._store.add(record))
        logger.info(
            f"Event created successfully with ID: {event_id}",
            extra={"event_id": event_id, "operation": "createEvent"},
        )
        return event_id

    async def list_events(self) -> list[dict]:
        events = await self._store.list_all()
        logger.info(
            f"Retrieved {len(events)} events",
            extra={"operation": "getAllEvents", "result_count": len(events)},
        )
        return events

    async def get_event(self, event_id: str) -> dict:
        event = await self._store.get(event_id)
        if event is None:
            raise NotFoundError(event_id)
        logger.info(
            f"Event with ID {event_id} retrieved successfully",
            extra={"event_id": event_id, "operation": "getEventById"},
        )
        return event

    async def update_event(self, payload: EventUpdate) -> None:
        fields = strip_immutable_fields(payload.to_document())
        fields["updatedAt"] = SERVER_TIMESTAMP
        if not await self._store.update(payload.id, fields):
            raise NotFoundError(payload.id)
        logger.info(
            f"Event with ID {payload.id} updated successfully",
            extra={"event_id": payload.id, "operation": "updateEvent"},
        )

    async def delete_event(self, event_id: str) -> None:
        if not await self._store.delete(event_id):
            raise NotFoundError(event_id)
        logger.info(
            f"Event with ID {event_id} deleted successfully",
            extra={"event_id": event_id, "operation": "deleteEvent"},
        )

    async def filter_events(self, params: EventFilterQuery) -> list[dict]:
        conditions = build_filter_conditions(
            EventType(params.event_type) if params.event_type else None,
            params.start_date,
            params.end_date,
        )
        for condition in conditions:
            logger.debug(
                f"Filtering events by {condition.field} {condition.op.value} {condition.value}",
            )
        events = await self._store.query(conditions)
        logger.info(
            f"Filtered {len(events)} events",
            extra={"operation": "filterEvents", "result_count": len(events)},
        )
        return events
