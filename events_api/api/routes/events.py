"""Event Routes — the six event endpoints: create, list, get, update, delete, filter.

Invariants:
    - createEvent, getEventById, updateEvent, deleteEvent sit behind require_auth
    - getAllEvents and filterEvents are public reads
    - Pipeline per request: auth gate → schema validation → one service call → response
    - Empty list results answer 204 with no body; missing ids answer 404

Design Decisions:
    - Paths keep the operation names clients already call (/createEvent, ...)
    - Routes only map service results to status codes; errors flow to the global handlers
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from events_api.api.dependencies import (
    get_event_service, require_auth, validated_body, validated_query,
)
from events_api.schemas.event import (
    EventCreate, EventFilterQuery, EventIdQuery, EventUpdate,
)
from events_api.services.event_service import EventService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["events"])


def _list_response(events: list[dict]):
    if not events:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return events


@router.post(
    "/createEvent",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_auth)],
)
async def create_event(
    payload: EventCreate = Depends(validated_body(EventCreate)),
    service: EventService = Depends(get_event_service),
):
    """Create an event; the store assigns its id."""
    event_id = await service.create_event(payload)
    return {"success": True, "id": event_id}


@router.get("/getAllEvents")
async def get_all_events(service: EventService = Depends(get_event_service)):
    """Every event in the collection."""
    events = await service.list_events()
    if not events:
        logger.info("No events found", extra={"operation": "getAllEvents"})
    return _list_response(events)


@router.get("/getEventById", dependencies=[Depends(require_auth)])
async def get_event_by_id(
    params: EventIdQuery = Depends(validated_query(EventIdQuery)),
    service: EventService = Depends(get_event_service),
):
    return await service.get_event(params.id)


@router.api_route(
    "/updateEvent",
    methods=["PUT", "PATCH"],
    dependencies=[Depends(require_auth)],
)
async def update_event(
    payload: EventUpdate = Depends(validated_body(EventUpdate)),
    service: EventService = Depends(get_event_service),
):
    """Partially update an event. id selects the event and is never written."""
    await service.update_event(payload)
    return {"success": True, "message": "Event updated successfully"}


@router.delete("/deleteEvent", dependencies=[Depends(require_auth)])
async def delete_event(
    params: EventIdQuery = Depends(validated_query(EventIdQuery)),
    service: EventService = Depends(get_event_service),
):
    await service.delete_event(params.id)
    return {"success": True, "message": "Event deleted successfully"}


@router.get("/filterEvents")
async def filter_events(
    params: EventFilterQuery = Depends(validated_query(EventFilterQuery)),
    service: EventService = Depends(get_event_service),
):
    """Events matching every supplied predicate (type, inclusive date range)."""
    events = await service.filter_events(params)
    if not events:
        logger.info(
            "No events match the filter criteria",
            extra={"operation": "filterEvents"},
        )
    return _list_response(events)
