"""Infrastructure Layer — database access, store adapters and cross-cutting concerns.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - All SQLAlchemy errors mapped to DatabaseError at the session boundary
"""
