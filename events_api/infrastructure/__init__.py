"""Infrastructure — database sessions, document store, token verification, logging.

Invariants:
    - Every IO concern lives here; core/ never imports from this package
"""
