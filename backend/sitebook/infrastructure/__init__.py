"""Infrastructure Layer — database session management and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic (errors excepted)
    - All driver exceptions mapped to StorageError

Design Decisions:
    - Thin wrappers over SQLAlchemy: the entity store stays driver-agnostic
"""
