"""Infrastructure Layer — database sessions, repositories and logging.

Invariants:
    - Infrastructure implements core contracts; core never imports from here
    - SQLAlchemy errors are mapped to core/errors.py types before leaving this layer

Design Decisions:
    - Repositories per kind over a generic DAO (ADR: ExMA single responsibility)
"""
