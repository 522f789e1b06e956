"""ORM Models — SQLAlchemy declarative models for persisted documents.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all or
      alembic autogenerate runs
"""

from events_api.models.document import Document  # noqa: F401
