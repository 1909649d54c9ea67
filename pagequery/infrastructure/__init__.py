"""Infrastructure Layer — database access, source adapters, and logging setup.

Invariants:
    - Infrastructure implements core/ contracts, never the other way round
    - SQLAlchemy errors are mapped to DatabaseError only at the session boundary
"""
