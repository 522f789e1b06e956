"""Service test fixtures — an in-memory RecordStore fake.

Invariants:
    - FakeRecordStore satisfies the RecordStore protocol without a database
    - Every call is logged so tests can assert the store was (or was not) touched
"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from events_api.core.domain_types import FilterOperator
from events_api.core.repository_protocols import Condition, SERVER_TIMESTAMP

_COMPARE = {
    FilterOperator.EQ: lambda a, b: a == b,
    FilterOperator.LT: lambda a, b: a < b,
    FilterOperator.LTE: lambda a, b: a <= b,
    FilterOperator.GT: lambda a, b: a > b,
    FilterOperator.GTE: lambda a, b: a >= b,
}


class FakeRecordStore:
    """Dict-backed store with a deterministic, always-advancing clock."""

    def __init__(self, collection: str = "events"):
        self.collection = collection
        self.records: dict[str, dict] = {}
        self.calls: list[tuple[str, object]] = []
        self._ids = itertools.count(1)
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def _stamp(self, data: dict) -> dict:
        now = self._now()
        return {k: (now if v is SERVER_TIMESTAMP else v) for k, v in data.items()}

    async def add(self, record: dict) -> str:
        self.calls.append(("add", record))
        record_id = f"evt-{next(self._ids)}"
        self.records[record_id] = {"id": record_id, **self._stamp(record)}
        return record_id

    async def get(self, record_id: str) -> dict | None:
        self.calls.append(("get", record_id))
        record = self.records.get(record_id)
        return dict(record) if record else None

    async def list_all(self) -> list[dict]:
        self.calls.append(("list_all", None))
        return [dict(r) for r in self.records.values()]

    async def query(self, conditions: list[Condition]) -> list[dict]:
        self.calls.append(("query", conditions))
        return [
            dict(r) for r in self.records.values()
            if all(
                c.field in r and _COMPARE[c.op](r[c.field], c.value)
                for c in conditions
            )
        ]

    async def update(self, record_id: str, fields: dict) -> bool:
        self.calls.append(("update", (record_id, fields)))
        if record_id not in self.records:
            return False
        self.records[record_id].update(self._stamp(fields))
        return True

    async def delete(self, record_id: str) -> bool:
        self.calls.append(("delete", record_id))
        return self.records.pop(record_id, None) is not None


@pytest.fixture
def fake_store():
    return FakeRecordStore()
