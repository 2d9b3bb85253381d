"""Statement Enforcement — statement root, object dispatch and sub-statements.

Invariants:
    - objectType of a statement object is read ONCE and mapped to an
      ObjectType variant; dispatch is exhaustive over the enum
    - A Sub-Statement never carries id, stored, authority or version
      (reported as INVALID_FIELDS) and never wraps another Sub-Statement
    - A nested Sub-Statement is reported and its subtree is not walked
    - Every subtree is validated only when its field is present

Design Decisions:
    - Statement and Sub-Statement share _validate_core_fields: the actor,
      verb, object, result, context and timestamp rules are identical
    - context receives the sibling object so revision/platform can be
      checked against the object variant
"""

from collections.abc import Callable, Mapping

from statement_gate.core.domain_types import ObjectType, Placement, ViolationKind
from statement_gate.core.enforce_activities import validate_activity
from statement_gate.core.enforce_agents import validate_agent_or_group
from statement_gate.core.enforce_attachments import validate_attachments
from statement_gate.core.enforce_context import validate_context
from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    check_required_fields,
)
from statement_gate.core.enforce_formats import validate_timestamp, validate_uuid
from statement_gate.core.enforce_result import validate_result
from statement_gate.core.enforce_statement_ref import validate_statement_ref
from statement_gate.core.enforce_verb import validate_verb
from statement_gate.core.rule_library import (
    STATEMENT_ALLOWED_FIELDS,
    STATEMENT_REQUIRED_FIELDS,
    SUB_STATEMENT_ALLOWED_FIELDS,
    SUB_STATEMENT_REQUIRED_FIELDS,
    VERSION_PATTERN,
)
from statement_gate.core.violations import ValidationScope


# ─── Statement ───────────────────────────────────────────────────

def validate_statement(stmt: object, scope: ValidationScope) -> None:
    """Validate one top-level statement, reporting every violation into scope."""
    if scope.exceeds_depth():
        return
    if not check_if_dict(stmt, "Statement", scope):
        return
    check_allowed_fields(STATEMENT_ALLOWED_FIELDS, stmt, "Statement", scope)
    check_required_fields(STATEMENT_REQUIRED_FIELDS, stmt, "Statement", scope)

    if "id" in stmt:
        validate_uuid(stmt["id"], "Statement id", scope.child("id"))
    if "version" in stmt:
        _validate_version(stmt["version"], scope.child("version"))
    if "stored" in stmt:
        validate_timestamp(stmt["stored"], "stored", scope.child("stored"))

    _validate_core_fields(stmt, scope, inside_sub_statement=False)

    if "authority" in stmt:
        validate_agent_or_group(
            stmt["authority"], Placement.AUTHORITY, scope.child("authority"),
        )
    if "attachments" in stmt:
        validate_attachments(stmt["attachments"], scope.child("attachments"))


def _validate_version(version: object, scope: ValidationScope) -> None:
    if not isinstance(version, str):
        scope.report(
            ViolationKind.INVALID_VERSION_TYPE,
            "Version must be a string",
        )
    elif not VERSION_PATTERN.match(version):
        scope.report(
            ViolationKind.UNSUPPORTED_VERSION,
            f"{version} is not a supported version",
            value=version,
        )


def _validate_core_fields(
    stmt: Mapping, scope: ValidationScope, *, inside_sub_statement: bool,
) -> None:
    if "actor" in stmt:
        validate_agent_or_group(stmt["actor"], Placement.ACTOR, scope.child("actor"))
    if "verb" in stmt:
        validate_verb(stmt["verb"], scope.child("verb"))
    if "object" in stmt:
        validate_object(
            stmt["object"], scope.child("object"),
            inside_sub_statement=inside_sub_statement,
        )
    if "result" in stmt:
        validate_result(stmt["result"], scope.child("result"))
    if "context" in stmt:
        validate_context(stmt["context"], stmt.get("object"), scope.child("context"))
    if "timestamp" in stmt:
        validate_timestamp(
            stmt["timestamp"], "timestamp", scope.child("timestamp"),
            forbid_negative_zero_offset=True,
        )


# ─── Object dispatch ─────────────────────────────────────────────

def classify_object(obj: Mapping) -> ObjectType | None:
    """Map objectType to its variant; absent means Activity, unknown means None."""
    raw = obj.get("objectType", ObjectType.ACTIVITY.value)
    try:
        return ObjectType(raw)
    except ValueError:
        return None


def validate_object(
    obj: object, scope: ValidationScope, *, inside_sub_statement: bool = False,
) -> None:
    if scope.exceeds_depth():
        return
    if not check_if_dict(obj, "Object", scope):
        return

    object_type = classify_object(obj)
    if object_type is None:
        scope.report(
            ViolationKind.INVALID_OBJECT_TYPE,
            f"The objectType in the statement's object is not valid - {obj['objectType']!r}",
            object_type=str(obj["objectType"]),
            allowed=[member.value for member in ObjectType],
        )
        return
    if object_type is ObjectType.SUB_STATEMENT and inside_sub_statement:
        scope.report(
            ViolationKind.NESTED_SUB_STATEMENT,
            "Cannot nest a SubStatement inside of another SubStatement",
        )
        return
    _OBJECT_VALIDATORS[object_type](obj, scope)


def _validate_agent_object(obj: Mapping, scope: ValidationScope) -> None:
    validate_agent_or_group(obj, Placement.OBJECT, scope)


# ─── Sub-Statement ───────────────────────────────────────────────

def validate_sub_statement(sub: Mapping, scope: ValidationScope) -> None:
    check_allowed_fields(SUB_STATEMENT_ALLOWED_FIELDS, sub, "SubStatement", scope)
    check_required_fields(SUB_STATEMENT_REQUIRED_FIELDS, sub, "SubStatement", scope)
    _validate_core_fields(sub, scope, inside_sub_statement=True)


_OBJECT_VALIDATORS: dict[ObjectType, Callable[[Mapping, ValidationScope], None]] = {
    ObjectType.ACTIVITY: validate_activity,
    ObjectType.AGENT: _validate_agent_object,
    ObjectType.GROUP: _validate_agent_object,
    ObjectType.SUB_STATEMENT: validate_sub_statement,
    ObjectType.STATEMENT_REF: validate_statement_ref,
}
