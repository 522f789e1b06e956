"""Event Query Building — translate filter parameters into store conditions.

Invariants:
    - Only AND-composed conditions are produced (the store has no OR)
    - Date bounds are inclusive: startDate -> `date >= start`, endDate -> `date <= end`
    - No parameters -> empty condition list, which the store treats as "all records"
"""

from datetime import datetime

from events_api.core.domain_types import EventField, EventType, FilterOperator
from events_api.core.repository_protocols import Condition
from events_api.core.timestamps import format_timestamp


def build_filter_conditions(
    event_type: EventType | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> list[Condition]:
    """Build the conjunctive query for filterEvents."""
    conditions: list[Condition] = []
    if event_type is not None:
        conditions.append(Condition(
            EventField.EVENT_TYPE.value, FilterOperator.EQ, EventType(event_type).value,
        ))
    if start_date is not None:
        conditions.append(Condition(
            EventField.DATE.value, FilterOperator.GTE, format_timestamp(start_date),
        ))
    if end_date is not None:
        conditions.append(Condition(
            EventField.DATE.value, FilterOperator.LTE, format_timestamp(end_date),
        ))
    return conditions


def strip_immutable_fields(fields: dict) -> dict:
    """Drop keys an update payload may never overwrite."""
    blocked = {EventField.ID.value, EventField.CREATED_AT.value}
    return {k: v for k, v in fields.items() if k not in blocked}
