"""Pydantic Schemas — declarative input rules for every event operation.

Invariants:
    - Schemas validate at system boundary (request body, query string)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
