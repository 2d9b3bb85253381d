"""Statement Reference Enforcement — exactly {objectType: "StatementRef", id: UUID}.

Used both as a statement object variant and as context.statement.
"""

from statement_gate.core.domain_types import ObjectType, ViolationKind
from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    check_required_fields,
)
from statement_gate.core.enforce_formats import validate_uuid
from statement_gate.core.rule_library import STATEMENT_REF_FIELDS
from statement_gate.core.violations import ValidationScope


def validate_statement_ref(ref: object, scope: ValidationScope) -> None:
    if not check_if_dict(ref, "StatementRef", scope):
        return
    check_allowed_fields(STATEMENT_REF_FIELDS, ref, "StatementRef", scope)
    check_required_fields(STATEMENT_REF_FIELDS, ref, "StatementRef", scope)
    if "objectType" in ref and ref["objectType"] != ObjectType.STATEMENT_REF.value:
        scope.report(
            ViolationKind.INVALID_OBJECT_TYPE,
            "StatementRef objectType must be set to 'StatementRef'",
            object_type=str(ref["objectType"]),
        )
    if "id" in ref:
        validate_uuid(ref["id"], "StatementRef id", scope.child("id"))
