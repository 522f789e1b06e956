"""Core Layer — pure request rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Validation and query building separated from the store shell so they can be
      tested without a database
"""
