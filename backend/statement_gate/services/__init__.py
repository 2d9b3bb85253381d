"""Services Layer — orchestration between the pure validator and persistence.

Invariants:
    - Services call core/ for every verdict; they never re-implement a rule
    - Persistence goes through a StatementRepository, never a raw session
"""
