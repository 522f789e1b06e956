"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EventId wraps the store-assigned string id — never a bare str in service signatures
    - CollectionName scopes a record store; EVENTS_COLLECTION is the configured default
    - EventType is a closed set; no other value is ever persisted
    - All valid operators encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EventId = NewType("EventId", str)
CollectionName = NewType("CollectionName", str)

EVENTS_COLLECTION = CollectionName("events")


# ─── Enums ───────────────────────────────────────────────────────

class EventType(str, Enum):
    """The four event kinds an Event may carry."""
    CONFERENCE = "Conference"
    MEETUP = "Meetup"
    WORKSHOP = "Workshop"
    WEBINAR = "Webinar"


class FilterOperator(str, Enum):
    """Comparison operators a store query may combine (AND only)."""
    EQ = "=="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="


class EventField(str, Enum):
    """Wire names of Event attributes used in store predicates."""
    ID = "id"
    TITLE = "title"
    EVENT_TYPE = "eventType"
    DATE = "date"
    LOCATION = "location"
    DESCRIPTION = "description"
    ORGANIZER = "organizer"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
