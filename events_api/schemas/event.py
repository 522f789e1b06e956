"""Event Schemas — Pydantic models with field-level rules for each event operation.

Invariants:
    - Unknown keys are rejected on every schema (extra="forbid")
    - Strings must be non-empty; optional fields may be omitted but never null
    - Date fields accept ISO-8601 strings only and normalize to aware UTC
    - eventType is validated against EventType — no other value survives validation

Design Decisions:
    - Wire names (camelCase) kept via aliases; Python attributes stay snake_case and
      are not accepted as input keys
    - Dates serialized with format_timestamp so stored strings sort chronologically
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from events_api.core.domain_types import EventType
from events_api.core.timestamps import format_timestamp, parse_iso_datetime

NonEmptyStr = Annotated[str, Field(min_length=1)]

_ISO_DATE_MESSAGE = "must be in ISO 8601 date format"


def _parse_date(value: object) -> datetime:
    try:
        return parse_iso_datetime(value)
    except (TypeError, ValueError):
        raise ValueError(_ISO_DATE_MESSAGE)


class _EventSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_document(self) -> dict:
        """Only the fields the caller actually sent, in wire form."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class EventCreate(_EventSchema):
    """create — every attribute but description is required."""
    title: NonEmptyStr
    event_type: EventType = Field(alias="eventType")
    date: datetime
    location: NonEmptyStr
    description: NonEmptyStr | None = None
    organizer: NonEmptyStr

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: object) -> datetime:
        return _parse_date(v)

    @field_validator("description", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("must be a string")
        return v

    @field_serializer("date")
    def serialize_date(self, v: datetime) -> str:
        return format_timestamp(v)


class EventUpdate(_EventSchema):
    """update — id required, every other attribute optional."""
    id: NonEmptyStr
    title: NonEmptyStr | None = None
    event_type: EventType | None = Field(None, alias="eventType")
    date: datetime | None = None
    location: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    organizer: NonEmptyStr | None = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: object) -> datetime:
        return _parse_date(v)

    @field_validator(
        "title", "event_type", "location", "description", "organizer",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_serializer("date")
    def serialize_date(self, v: datetime | None) -> str | None:
        return format_timestamp(v) if v is not None else None


class EventIdQuery(_EventSchema):
    """get-by-id and delete — a single required id."""
    id: NonEmptyStr


class EventFilterQuery(_EventSchema):
    """filter — three optional predicates, all inclusive."""
    event_type: EventType | None = Field(None, alias="eventType")
    start_date: datetime | None = Field(None, alias="startDate")
    end_date: datetime | None = Field(None, alias="endDate")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_bound(cls, v: object) -> datetime:
        return _parse_date(v)
