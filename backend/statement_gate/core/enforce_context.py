"""Context Enforcement — registration, instructor/team, context activities, agents and groups.

Invariants:
    - team is a Group (a missing objectType defaults to Agent and fails)
    - contextActivities keys are parent|grouping|category|other; each value is
      one Activity or a list of Activities
    - contextAgents/contextGroups entries each carry an objectType
    - revision and platform are strings, only allowed when the statement's
      object is an Activity
"""

from collections.abc import Mapping

from statement_gate.core.domain_types import ObjectType, Placement, ViolationKind
from statement_gate.core.enforce_activities import validate_activity
from statement_gate.core.enforce_agents import validate_agent_or_group
from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    check_if_list,
)
from statement_gate.core.enforce_formats import (
    validate_extensions,
    validate_iri,
    validate_language_tag,
    validate_uuid,
)
from statement_gate.core.enforce_statement_ref import validate_statement_ref
from statement_gate.core.rule_library import (
    CONTEXT_ACTIVITY_KEYS,
    CONTEXT_ACTIVITY_ONLY_FIELDS,
    CONTEXT_AGENT_ALLOWED_FIELDS,
    CONTEXT_ALLOWED_FIELDS,
    CONTEXT_GROUP_ALLOWED_FIELDS,
)
from statement_gate.core.violations import ValidationScope


def validate_context(
    context: object, statement_object: object, scope: ValidationScope,
) -> None:
    """Validate context; statement_object is the sibling object it describes."""
    if scope.exceeds_depth():
        return
    if not check_if_dict(context, "Context", scope):
        return
    check_allowed_fields(CONTEXT_ALLOWED_FIELDS, context, "Context", scope)

    if "registration" in context:
        validate_uuid(
            context["registration"], "Context registration",
            scope.child("registration"),
        )
    if "instructor" in context:
        validate_agent_or_group(
            context["instructor"], Placement.INSTRUCTOR, scope.child("instructor"),
        )
    if "team" in context:
        _validate_team(context["team"], scope.child("team"))
    if "contextActivities" in context:
        validate_context_activities(
            context["contextActivities"], scope.child("contextActivities"),
        )
    if "contextAgents" in context:
        validate_context_agents(context["contextAgents"], scope.child("contextAgents"))
    if "contextGroups" in context:
        validate_context_groups(context["contextGroups"], scope.child("contextGroups"))

    for key in CONTEXT_ACTIVITY_ONLY_FIELDS:
        if key in context:
            _validate_activity_only_field(context, key, statement_object, scope)

    if "language" in context:
        validate_language_tag(context["language"], "Context language", scope.child("language"))
    if "statement" in context:
        validate_statement_ref(context["statement"], scope.child("statement"))
    if "extensions" in context:
        validate_extensions(
            context["extensions"], "Context extensions", scope.child("extensions"),
        )


def _validate_team(team: object, scope: ValidationScope) -> None:
    normalized = validate_agent_or_group(team, Placement.TEAM, scope)
    if normalized is not None and normalized.get("objectType") != ObjectType.GROUP.value:
        scope.report(
            ViolationKind.INVALID_CONTEXT_TEAM,
            "Team in context must be a group",
        )


def _validate_activity_only_field(
    context: Mapping, key: str, statement_object: object, scope: ValidationScope,
) -> None:
    if not isinstance(context[key], str):
        scope.report(
            ViolationKind.INVALID_CONTEXT_FIELD_TYPE,
            f"Context {key} must be a string",
            field=key,
        )
    if isinstance(statement_object, Mapping):
        object_type = statement_object.get("objectType", ObjectType.ACTIVITY.value)
        if object_type != ObjectType.ACTIVITY.value:
            scope.report(
                ViolationKind.INVALID_CONTEXT_FIELD_FOR_OBJECT,
                f"Context {key} is only allowed when the statement object is an Activity",
                field=key, object_type=str(object_type),
            )


def validate_context_activities(activities: object, scope: ValidationScope) -> None:
    if not check_if_dict(activities, "Context activities", scope):
        return
    for key, value in activities.items():
        key_scope = scope.child(str(key))
        if key not in CONTEXT_ACTIVITY_KEYS:
            key_scope.report(
                ViolationKind.INVALID_CONTEXT_ACTIVITY_TYPE,
                f"Invalid context activity type: {key}",
                allowed=sorted(CONTEXT_ACTIVITY_KEYS),
            )
            continue
        if isinstance(value, list):
            for index, activity in enumerate(value):
                validate_activity(activity, key_scope.child(index))
        elif isinstance(value, Mapping):
            validate_activity(value, key_scope)
        else:
            key_scope.report(
                ViolationKind.INVALID_CONTEXT_ACTIVITIES_FORMAT,
                f"contextActivities {key} is not formatted correctly",
            )


# ─── Context agents / groups ─────────────────────────────────────

def validate_context_agents(entries: object, scope: ValidationScope) -> None:
    _validate_context_entries(
        entries, "Context Agents", "agent", CONTEXT_AGENT_ALLOWED_FIELDS,
        Placement.CONTEXT_AGENT, scope,
    )


def validate_context_groups(entries: object, scope: ValidationScope) -> None:
    _validate_context_entries(
        entries, "Context Groups", "group", CONTEXT_GROUP_ALLOWED_FIELDS,
        Placement.CONTEXT_GROUP, scope,
    )


def _validate_context_entries(
    entries: object,
    name: str,
    member_key: str,
    allowed: frozenset,
    placement: Placement,
    scope: ValidationScope,
) -> None:
    if not check_if_list(entries, name, scope):
        return
    for index, entry in enumerate(entries):
        entry_scope = scope.child(index)
        if not check_if_dict(entry, f"{name} entry", entry_scope):
            continue
        check_allowed_fields(allowed, entry, f"{name} entry", entry_scope)
        if "objectType" not in entry:
            entry_scope.report(
                ViolationKind.MISSING_OBJECT_TYPE,
                f"{name} entries must have an objectType",
            )
        if member_key in entry:
            member_scope = entry_scope.child(member_key)
            normalized = validate_agent_or_group(entry[member_key], placement, member_scope)
            if (
                placement is Placement.CONTEXT_GROUP
                and normalized is not None
                and normalized.get("objectType") != ObjectType.GROUP.value
            ):
                member_scope.report(
                    ViolationKind.INVALID_OBJECT_TYPE,
                    f"{name} group must be a Group",
                )
        if "relevantTypes" in entry:
            _validate_relevant_types(entry["relevantTypes"], entry_scope.child("relevantTypes"))


def _validate_relevant_types(types: object, scope: ValidationScope) -> None:
    if not check_if_list(types, "relevantTypes", scope):
        return
    for index, value in enumerate(types):
        validate_iri(value, "relevantTypes", scope.child(index))
