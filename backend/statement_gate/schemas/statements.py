"""Statement Schemas — response contracts for the statements endpoints.

Invariants:
    - ValidationReport mirrors core ValidationResult.to_dict() field for field
    - IntakeResponse.destination is a Destination value
"""

from typing import Any

from pydantic import BaseModel, Field

from statement_gate.core.domain_types import Destination
from statement_gate.core.violations import ValidationResult


class ViolationOut(BaseModel):
    """One violation as returned to the client."""
    kind: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ValidationReport(BaseModel):
    """Dry-run verdict — POST /xapi/statements/validate."""
    valid: bool
    errors: list[ViolationOut]

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationReport":
        return cls.model_validate(result.to_dict())


class IntakeResponse(ValidationReport):
    """Verdict plus where the submission was stored — POST /xapi/statements."""
    destination: Destination
    stored: int = Field(ge=0)
