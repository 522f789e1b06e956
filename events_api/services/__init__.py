"""Services — event operations composed over the record store.

Invariants:
    - Services depend on the RecordStore protocol, never on SQLAlchemy directly
    - At most one store mutation per service call
"""
