"""ExperienceRecord ORM — one conformant statement accepted by the gate.

Invariants:
    - payload is the statement exactly as received; nothing is rewritten
    - received_at is the insertion time, kept apart from the statement's own timestamp
    - statement_id mirrors payload["id"] when the statement carries one

Design Decisions:
    - JSON column for payload: statements keep their full, open-ended shape
    - statement_id not unique: storage-level deduplication is out of scope
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from statement_gate.db.base import Base


class ExperienceRecord(Base):
    """Accepted statement — destination "experiences"."""
    __tablename__ = "experiences"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    statement_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True,
    )
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    received_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
