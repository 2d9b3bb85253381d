"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Persistence accessed through Protocol types, implemented by the shell
    - The insertion timestamp is supplied by the caller, never read from the
      statement itself

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the validator never calls
      them — the shell orchestrates persistence around the pure verdict
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID


class StatementRepository(Protocol):
    """Contract for statement persistence — implemented by shell."""
    async def save_accepted(
        self, statements: list[dict], received_at: datetime,
    ) -> list[UUID]: ...
    async def save_quarantined(
        self, payload: object, violations: list[dict], received_at: datetime,
    ) -> UUID: ...
