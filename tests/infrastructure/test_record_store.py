"""Document Record Store — collection-scoped CRUD and AND-only queries on SQLite.

Invariants:
    - add() assigns unique ids and resolves SERVER_TIMESTAMP to one clock reading
    - update() merges, never clobbers, and never rewrites id or createdAt
    - update()/delete() report missing ids with False
    - query() conditions combine with AND; an empty list returns everything
    - collections never see each other's documents
    - driver failures are rolled back and surface as a sanitized StoreError
"""

from datetime import datetime, timezone

import pytest

from events_api.core.domain_types import FilterOperator
from events_api.core.errors import StoreError
from events_api.core.repository_protocols import Condition, SERVER_TIMESTAMP
from events_api.db.base import Base
from events_api.infrastructure.record_store import DocumentRecordStore


def _event(**overrides) -> dict:
    return {
        "title": "Launch",
        "eventType": "Webinar",
        "date": "2025-01-10T10:00:00.000Z",
        "location": "HQ",
        "organizer": "Alice",
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
        **overrides,
    }


@pytest.fixture
def store(test_db):
    return DocumentRecordStore(test_db, "events")


async def test_add_returns_unique_ids(store):
    first = await store.add(_event())
    second = await store.add(_event())
    assert first and second
    assert first != second


async def test_get_returns_record_with_id_and_timestamps(store):
    event_id = await store.add(_event())
    record = await store.get(event_id)
    assert record["id"] == event_id
    assert record["title"] == "Launch"
    assert record["date"] == "2025-01-10T10:00:00.000Z"
    assert record["createdAt"] == record["updatedAt"]
    assert record["createdAt"].endswith("Z")


async def test_add_ignores_caller_supplied_id(store):
    event_id = await store.add(_event(id="chosen-by-client"))
    assert event_id != "chosen-by-client"
    assert await store.get("chosen-by-client") is None


async def test_get_missing_returns_none(store):
    assert await store.get("does-not-exist") is None


async def test_list_all_empty_collection(store):
    assert await store.list_all() == []


async def test_list_all_in_creation_order(store):
    ids = [await store.add(_event(title=f"E{i}")) for i in range(3)]
    assert [r["id"] for r in await store.list_all()] == ids


async def test_collections_are_isolated(test_db, store):
    other = DocumentRecordStore(test_db, "drafts")
    draft_id = await other.add({"title": "Draft"})
    await store.add(_event())
    assert [r["title"] for r in await store.list_all()] == ["Launch"]
    assert await store.get(draft_id) is None


async def test_update_merges_fields(store):
    event_id = await store.add(_event(description="Original"))
    assert await store.update(event_id, {"location": "Lisbon"})
    record = await store.get(event_id)
    assert record["location"] == "Lisbon"
    assert record["description"] == "Original"
    assert record["title"] == "Launch"


async def test_update_advances_updated_at_only(store):
    event_id = await store.add(_event())
    before = await store.get(event_id)
    await store.update(event_id, {"title": "Relaunch", "updatedAt": SERVER_TIMESTAMP})
    after = await store.get(event_id)
    assert after["createdAt"] == before["createdAt"]
    assert after["updatedAt"] > before["updatedAt"]


async def test_update_never_rewrites_id_or_created_at(store):
    event_id = await store.add(_event())
    before = await store.get(event_id)
    await store.update(event_id, {"id": "hijack", "createdAt": "2000-01-01T00:00:00Z"})
    after = await store.get(event_id)
    assert after["id"] == event_id
    assert after["createdAt"] == before["createdAt"]
    assert await store.get("hijack") is None


async def test_update_missing_returns_false(store):
    assert await store.update("nope", {"title": "x"}) is False


async def test_delete_then_delete_again(store):
    event_id = await store.add(_event())
    assert await store.delete(event_id) is True
    assert await store.get(event_id) is None
    assert await store.delete(event_id) is False


async def test_query_equality(store):
    await store.add(_event(eventType="Workshop", title="W"))
    await store.add(_event(eventType="Meetup", title="M"))
    results = await store.query([Condition("eventType", FilterOperator.EQ, "Workshop")])
    assert [r["title"] for r in results] == ["W"]


async def test_query_range_is_inclusive(store):
    for day in ("05", "10", "15"):
        await store.add(_event(title=day, date=f"2025-01-{day}T10:00:00.000Z"))
    results = await store.query([
        Condition("date", FilterOperator.GTE, "2025-01-10T10:00:00.000Z"),
        Condition("date", FilterOperator.LTE, "2025-01-15T10:00:00.000Z"),
    ])
    assert [r["title"] for r in results] == ["10", "15"]


async def test_query_accepts_datetime_values(store):
    await store.add(_event(title="early", date="2025-01-05T10:00:00.000Z"))
    await store.add(_event(title="late", date="2025-02-05T10:00:00.000Z"))
    cutoff = datetime(2025, 2, 1, tzinfo=timezone.utc)
    results = await store.query([Condition("date", FilterOperator.LT, cutoff)])
    assert [r["title"] for r in results] == ["early"]


async def test_query_conditions_are_conjunctive(store):
    await store.add(_event(title="a", eventType="Workshop", date="2025-01-05T10:00:00.000Z"))
    await store.add(_event(title="b", eventType="Workshop", date="2025-03-05T10:00:00.000Z"))
    await store.add(_event(title="c", eventType="Meetup", date="2025-03-05T10:00:00.000Z"))
    results = await store.query([
        Condition("eventType", FilterOperator.EQ, "Workshop"),
        Condition("date", FilterOperator.GT, "2025-02-01T00:00:00.000Z"),
    ])
    assert [r["title"] for r in results] == ["b"]


async def test_query_on_timestamp_column(store):
    event_id = await store.add(_event())
    record = await store.get(event_id)
    results = await store.query([
        Condition("createdAt", FilterOperator.GTE, record["createdAt"]),
    ])
    assert [r["id"] for r in results] == [event_id]


async def test_query_without_conditions_equals_list_all(store):
    await store.add(_event())
    await store.add(_event(eventType="Meetup"))
    assert await store.query([]) == await store.list_all()


async def test_unsupported_operator_rejected(store):
    with pytest.raises(ValueError):
        await store.query([Condition("title", "in", ["a"])])


async def test_driver_failure_becomes_sanitized_store_error(
    test_engine, test_db, store, caplog,
):
    await store.add(_event())
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    with pytest.raises(StoreError) as exc_info:
        await store.list_all()

    assert exc_info.value.message == "Store query failed: Database operation failed"
    assert exc_info.value.context.operation == "query"
    assert "no such table" not in str(exc_info.value.to_response())
    assert any("no such table" in r.getMessage() for r in caplog.records)
    assert not test_db.in_transaction()
