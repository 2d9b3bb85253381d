"""ORM Models — SQLAlchemy declarative models for stored submissions.

Invariants:
    - All models inherit from Base (db/base.py)
    - experiences holds conformant statements, events holds quarantined submissions

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/alembic
"""

from statement_gate.models.experience_record import ExperienceRecord  # noqa: F401
from statement_gate.models.quarantined_event import QuarantinedEvent  # noqa: F401
