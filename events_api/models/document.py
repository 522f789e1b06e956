"""Document ORM — one schema-less record in a named collection.

Invariants:
    - (collection, id) identifies a document; id is a uuid4 hex string assigned on insert
    - data holds every user field; id and timestamps live in their own columns
    - created_at is written once; updated_at is rewritten on every update

Design Decisions:
    - JSON column for data: the store stays schema-less, predicates use JSON paths
    - Timestamps as columns: server-assigned values the payload can never overwrite
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from events_api.db.base import Base


def _new_document_id() -> str:
    return uuid.uuid4().hex


class Document(Base):
    """A single record owned by a collection."""
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_collection_created_at", "collection", "created_at"),
    )

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)
    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=_new_document_id,
    )
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
