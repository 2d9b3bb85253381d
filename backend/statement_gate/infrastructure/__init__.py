"""Infrastructure Layer — database access, persistence adapters and logging.

Invariants:
    - Infrastructure implements core/ protocols; core/ never imports infrastructure
    - All SQLAlchemy failures mapped to DatabaseError before leaving this layer
"""
