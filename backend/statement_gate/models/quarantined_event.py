"""QuarantinedEvent ORM — a non-conformant submission kept with its violations.

Invariants:
    - One row per rejected submission, batch or single, stored whole
    - violations is the validator's error list ({kind, message, detail})

Design Decisions:
    - payload stored as-is, even when it is not a statement shape, so
      producers can be debugged from the quarantine alone
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from statement_gate.db.base import Base


class QuarantinedEvent(Base):
    """Rejected submission — destination "events"."""
    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    payload: Mapped[Any] = mapped_column(JSON, nullable=True)
    violations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    received_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
