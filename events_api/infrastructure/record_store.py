"""Document Record Store — collection-scoped document operations over SQLAlchemy.

Invariants:
    - Every query is scoped to self.collection; documents never cross collections
    - add() assigns a fresh uuid4 id in the same INSERT that creates the row
    - update() merges fields into the stored document; unspecified fields survive,
      id and createdAt are never overwritten, updatedAt strictly increases
    - Conditions combine with AND only; supported operators are ==, <, <=, >, >=
    - SQLAlchemy failures become StoreError at the call site; driver text is logged only

Design Decisions:
    - Read-merge-write under SELECT ... FOR UPDATE: one transaction, one row lock
      (SQLite ignores FOR UPDATE and serializes writers itself)
    - JSON-path accessors typed from the comparison value (string, number, bool)
    - Timestamp fields are real columns so they can be compared as datetimes
"""

import logging
import operator
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Any, AsyncGenerator

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from events_api.core.domain_types import CollectionName, EventField, FilterOperator
from events_api.core.errors import ErrorContext, StoreError
from events_api.core.repository_protocols import Condition, SERVER_TIMESTAMP
from events_api.core.timestamps import (
    ensure_utc, format_timestamp, parse_iso_datetime, utc_now,
)
from events_api.models.document import Document

logger = logging.getLogger(__name__)

_OPERATORS = {
    FilterOperator.EQ: operator.eq,
    FilterOperator.LT: operator.lt,
    FilterOperator.LTE: operator.le,
    FilterOperator.GT: operator.gt,
    FilterOperator.GTE: operator.ge,
}

_TIMESTAMP_COLUMNS = {
    EventField.CREATED_AT.value: Document.created_at,
    EventField.UPDATED_AT.value: Document.updated_at,
}

_ONE_TICK = timedelta(microseconds=1)


class DocumentRecordStore:
    """RecordStore implementation for one collection of the documents table."""

    def __init__(self, db: AsyncSession, collection: CollectionName):
        self._db = db
        self.collection = collection

    # ─── Writes ──────────────────────────────────────────────────

    async def add(self, record: dict) -> str:
        now = utc_now()
        data = {k: v for k, v in record.items() if k != EventField.ID.value}
        created_at = _resolve_timestamp(
            data.pop(EventField.CREATED_AT.value, SERVER_TIMESTAMP), now,
        )
        updated_at = _resolve_timestamp(
            data.pop(EventField.UPDATED_AT.value, SERVER_TIMESTAMP), now,
        )
        document = Document(
            collection=self.collection,
            id=uuid.uuid4().hex,
            data=_resolve_sentinels(data, now),
            created_at=created_at,
            updated_at=max(created_at, updated_at),
        )
        async with self._guard("add"):
            self._db.add(document)
            await self._db.commit()
        return document.id

    async def update(self, record_id: str, fields: dict) -> bool:
        now = utc_now()
        protected = {
            EventField.ID.value, EventField.CREATED_AT.value,
            EventField.UPDATED_AT.value,
        }
        changes = _resolve_sentinels(
            {k: v for k, v in fields.items() if k not in protected}, now,
        )
        async with self._guard("update", record_id):
            result = await self._db.execute(
                self._select().where(Document.id == record_id).with_for_update(),
            )
            document = result.scalar_one_or_none()
            if document is None:
                return False
            previous = ensure_utc(document.updated_at)
            # reassign, never mutate: JSON columns only track replacement
            document.data = {**document.data, **changes}
            document.updated_at = max(now, previous + _ONE_TICK)
            await self._db.commit()
        return True

    async def delete(self, record_id: str) -> bool:
        async with self._guard("delete", record_id):
            result = await self._db.execute(
                delete(Document).where(
                    Document.collection == self.collection,
                    Document.id == record_id,
                ),
            )
            await self._db.commit()
        return result.rowcount > 0

    # ─── Reads ───────────────────────────────────────────────────

    async def get(self, record_id: str) -> dict | None:
        async with self._guard("get", record_id):
            result = await self._db.execute(
                self._select().where(Document.id == record_id),
            )
            document = result.scalar_one_or_none()
        return _to_record(document) if document else None

    async def list_all(self) -> list[dict]:
        return await self.query([])

    async def query(self, conditions: list[Condition]) -> list[dict]:
        statement = self._select()
        for condition in conditions:
            statement = statement.where(_predicate(condition))
        statement = statement.order_by(Document.created_at, Document.id)
        async with self._guard("query"):
            result = await self._db.execute(statement)
            documents = result.scalars().all()
        return [_to_record(d) for d in documents]

    # ─── Internals ───────────────────────────────────────────────

    def _select(self):
        return select(Document).where(Document.collection == self.collection)

    @asynccontextmanager
    async def _guard(
        self, operation: str, record_id: str | None = None,
    ) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Store {operation} failed on '{self.collection}': {e}",
                exc_info=True,
                extra={"operation": operation, "event_id": record_id},
            )
            raise StoreError(
                "Database operation failed", operation,
                ErrorContext(event_id=record_id, operation=operation),
            ) from e


def _predicate(condition: Condition):
    try:
        compare = _OPERATORS[FilterOperator(condition.op)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported operator: {condition.op!r}")

    column = _TIMESTAMP_COLUMNS.get(condition.field)
    if column is not None:
        value = condition.value
        if isinstance(value, str):
            value = parse_iso_datetime(value)
        return compare(column, value)

    if condition.field == EventField.ID.value:
        return compare(Document.id, condition.value)

    element = Document.data[condition.field]
    value = condition.value
    if isinstance(value, datetime):
        value = format_timestamp(value)
    if isinstance(value, bool):
        return compare(element.as_boolean(), value)
    if isinstance(value, (int, float)):
        return compare(element.as_float(), value)
    return compare(element.as_string(), value)


def _resolve_timestamp(value: Any, now: datetime) -> datetime:
    if value is SERVER_TIMESTAMP:
        return now
    if isinstance(value, str):
        return parse_iso_datetime(value)
    return ensure_utc(value)


def _resolve_sentinels(data: dict, now: datetime) -> dict:
    stamp = format_timestamp(now, "microseconds")
    return {k: (stamp if v is SERVER_TIMESTAMP else v) for k, v in data.items()}


def _to_record(document: Document) -> dict:
    return {
        "id": document.id,
        **document.data,
        "createdAt": format_timestamp(document.created_at, "microseconds"),
        "updatedAt": format_timestamp(document.updated_at, "microseconds"),
    }
