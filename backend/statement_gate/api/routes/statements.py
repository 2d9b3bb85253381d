"""Statements — intake and dry-run validation of experience statements.

Invariants:
    - Both endpoints require Basic auth (checked before the body is read)
    - POST /xapi/statements: 200 when stored in experiences, 400 when quarantined in events
    - POST /xapi/statements/validate never touches the database
    - One commit per request; a failed commit rolls the whole submission back

Design Decisions:
    - Raw body parsed by the service, not by a Pydantic model: a malformed
      statement must still be quarantined, so the body cannot be rejected at
      the schema layer
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from statement_gate.api.auth import require_basic_auth
from statement_gate.config import get_settings
from statement_gate.infrastructure.database import database_step, get_db
from statement_gate.infrastructure.statement_repository import SqlStatementRepository
from statement_gate.schemas.statements import IntakeResponse, ValidationReport
from statement_gate.services.statement_intake import (
    StatementIntake,
    check_statements,
    parse_payload,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/xapi", tags=["statements"])


@router.post(
    "/statements",
    response_model=IntakeResponse,
    responses={400: {"model": IntakeResponse}},
    dependencies=[Depends(require_basic_auth)],
)
async def submit_statements(request: Request, db: AsyncSession = Depends(get_db)):
    """Validate a statement or batch and store it in experiences or events."""
    payload = parse_payload(await request.body())
    intake = StatementIntake(
        SqlStatementRepository(db), get_settings().validation_limits(),
    )
    outcome = await intake.submit(payload)
    async with database_step("commit"):
        await db.commit()

    body = IntakeResponse(
        **outcome.result.to_dict(),
        destination=outcome.destination,
        stored=outcome.stored,
    )
    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if outcome.result.valid
            else status.HTTP_400_BAD_REQUEST
        ),
        content=body.model_dump(mode="json"),
    )


@router.post(
    "/statements/validate",
    response_model=ValidationReport,
    dependencies=[Depends(require_basic_auth)],
)
async def validate_only(request: Request):
    """Dry run — return the verdict without storing anything."""
    payload = parse_payload(await request.body())
    result = check_statements(payload, get_settings().validation_limits())
    return ValidationReport.from_result(result)
