"""Statement Intake — parse, validate, then route a submission to its destination.

Invariants:
    - The verdict comes from validate_statements() alone; this module adds no rules
    - Valid submission ⇒ one experiences row per statement
    - Invalid submission ⇒ exactly one events row holding the whole payload
      and its violations, never a partial accept
    - An empty or unparseable body raises MalformedPayloadError and stores nothing
    - NaN, Infinity and -Infinity are not JSON: they are rejected at parse time

Design Decisions:
    - Repository injected (StatementRepository protocol): intake is testable
      without a database, the route decides the transaction boundary
    - received_at taken once per submission so every row of a batch shares it
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from statement_gate.core.domain_types import Destination
from statement_gate.core.errors import MalformedPayloadError
from statement_gate.core.repository_protocols import StatementRepository
from statement_gate.core.statement_validator import validate_statements
from statement_gate.core.violations import ValidationLimits, ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntakeOutcome:
    """What happened to one submission."""
    result: ValidationResult
    destination: Destination
    stored: int


def parse_payload(body: bytes) -> object:
    """Decode a request body into a JSON document."""
    if not body.strip():
        raise MalformedPayloadError("Request body is empty")
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedPayloadError(f"Request body is not valid JSON: {e}")


def _reject_constant(token: str) -> float:
    raise MalformedPayloadError(f"Request body contains the non-JSON number {token}")


def check_statements(
    payload: object, limits: ValidationLimits | None = None,
) -> ValidationResult:
    """Validate without storing anything."""
    result = validate_statements(payload, limits)
    logger.info(
        "Statements checked",
        extra={
            "statement_count": _count(payload),
            "violation_count": len(result.errors),
        },
    )
    return result


class StatementIntake:
    """Validates submissions and hands them to a StatementRepository."""

    def __init__(
        self, repository: StatementRepository, limits: ValidationLimits | None = None,
    ):
        self._repository = repository
        self._limits = limits or ValidationLimits()

    async def submit(self, payload: object) -> IntakeOutcome:
        result = validate_statements(payload, self._limits)
        received_at = datetime.now(timezone.utc)

        if result.valid:
            statements = payload if isinstance(payload, list) else [payload]
            ids = await self._repository.save_accepted(statements, received_at)
            outcome = IntakeOutcome(result, Destination.EXPERIENCES, len(ids))
            logger.info(
                "Statements accepted",
                extra={
                    "destination": outcome.destination.value,
                    "statement_count": outcome.stored,
                },
            )
            return outcome

        violations = [error.to_dict() for error in result.errors]
        await self._repository.save_quarantined(payload, violations, received_at)
        logger.warning(
            "Submission quarantined: %s",
            ", ".join(sorted(set(result.kinds))),
            extra={
                "destination": Destination.EVENTS.value,
                "statement_count": _count(payload),
                "violation_count": len(violations),
            },
        )
        return IntakeOutcome(result, Destination.EVENTS, 1)


def _count(payload: object) -> int:
    if isinstance(payload, list):
        return len(payload)
    return 1 if isinstance(payload, dict) else 0
