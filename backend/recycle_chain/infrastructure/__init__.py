"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ domain logic, only core/errors
    - All driver exceptions mapped to DatabaseError

Design Decisions:
    - Thin wrappers over SQLAlchemy so tests can swap the engine
"""
