"""SQL Statement Repository — StatementRepository implemented over an AsyncSession.

Invariants:
    - Methods add and flush; the caller owns commit (one transaction per request)
    - Flush failures surface as DatabaseError naming save_accepted or save_quarantined
    - received_at passed in by the caller is written verbatim to every row

Design Decisions:
    - Returns generated row ids so the route can report how many rows were stored
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from statement_gate.infrastructure.database import database_step
from statement_gate.models.experience_record import ExperienceRecord
from statement_gate.models.quarantined_event import QuarantinedEvent


class SqlStatementRepository:
    """Persists accepted statements and quarantined submissions."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def save_accepted(
        self, statements: list[dict], received_at: datetime,
    ) -> list[UUID]:
        records = [
            ExperienceRecord(
                statement_id=_statement_id(statement),
                payload=statement,
                received_at=received_at,
            )
            for statement in statements
        ]
        async with database_step("save_accepted"):
            self._db.add_all(records)
            await self._db.flush()
        return [record.id for record in records]

    async def save_quarantined(
        self, payload: object, violations: list[dict], received_at: datetime,
    ) -> UUID:
        event = QuarantinedEvent(
            payload=payload, violations=violations, received_at=received_at,
        )
        async with database_step("save_quarantined"):
            self._db.add(event)
            await self._db.flush()
        return event.id


def _statement_id(statement: dict) -> str | None:
    statement_id = statement.get("id")
    return statement_id if isinstance(statement_id, str) else None
