"""API Layer — FastAPI routes, request dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON bodies in the {success, ...} shape or plain record lists

Design Decisions:
    - Thin routes delegate to services
"""
