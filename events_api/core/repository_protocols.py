"""Boundary Protocols — contracts between core and the document store shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store queries are conjunctions of Condition values (AND only, no OR, no nesting)
    - SERVER_TIMESTAMP is resolved by the store at write time, never by the caller

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the services orchestrate the awaits
"""

from dataclasses import dataclass
from typing import Any, Protocol

from events_api.core.domain_types import CollectionName, FilterOperator


class _ServerTimestamp:
    """Sentinel asking the store to write its own clock value."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class Condition:
    """A single predicate: `field op value`."""
    field: str
    op: FilterOperator
    value: Any


class RecordStore(Protocol):
    """Contract for one named collection in the document store."""
    collection: CollectionName

    async def add(self, record: dict) -> str: ...
    async def get(self, record_id: str) -> dict | None: ...
    async def list_all(self) -> list[dict]: ...
    async def query(self, conditions: list[Condition]) -> list[dict]: ...
    async def update(self, record_id: str, fields: dict) -> bool: ...
    async def delete(self, record_id: str) -> bool: ...
