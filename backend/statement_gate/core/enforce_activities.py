"""Activity Enforcement — activities, definitions and interaction components.

Invariants:
    - An Activity has an IRI id; objectType, when given, is "Activity"
    - correctResponsesPattern and interaction components require interactionType
    - Each interaction type admits exactly the components listed in
      INTERACTION_COMPONENTS_BY_TYPE; all of them are mandatory, any other is rejected
    - Interaction activity ids are strings, unique within one component list

Design Decisions:
    - interactionType parsed once into InteractionType and reused for the
      component checks (None when absent or unknown)
"""

from collections import Counter
from collections.abc import Mapping

from statement_gate.core.domain_types import InteractionType, ObjectType, ViolationKind
from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    check_if_list,
    check_required_fields,
)
from statement_gate.core.enforce_formats import (
    validate_extensions,
    validate_iri,
    validate_lang_map,
)
from statement_gate.core.rule_library import (
    ACTIVITY_ALLOWED_FIELDS,
    ACTIVITY_DEFINITION_ALLOWED_FIELDS,
    ACTIVITY_REQUIRED_FIELDS,
    INTERACTION_ACTIVITY_ALLOWED_FIELDS,
    INTERACTION_ACTIVITY_REQUIRED_FIELDS,
    INTERACTION_COMPONENTS,
    INTERACTION_COMPONENTS_BY_TYPE,
)
from statement_gate.core.violations import ValidationScope


def validate_activity(activity: object, scope: ValidationScope) -> None:
    if scope.exceeds_depth():
        return
    if not check_if_dict(activity, "Activity", scope):
        return
    check_allowed_fields(ACTIVITY_ALLOWED_FIELDS, activity, "Activity", scope)
    check_required_fields(ACTIVITY_REQUIRED_FIELDS, activity, "Activity", scope)

    object_type = activity.get("objectType", ObjectType.ACTIVITY.value)
    if object_type != ObjectType.ACTIVITY.value:
        scope.report(
            ViolationKind.INVALID_OBJECT_TYPE,
            f"Activity objectType must be 'Activity' - got {object_type!r}",
            object_type=str(object_type),
        )
    if "id" in activity:
        validate_iri(activity["id"], "Activity id", scope.child("id"))
    if "definition" in activity:
        validate_activity_definition(activity["definition"], scope.child("definition"))


def validate_activity_definition(definition: object, scope: ValidationScope) -> None:
    if scope.exceeds_depth():
        return
    if not check_if_dict(definition, "Activity definition", scope):
        return
    check_allowed_fields(
        ACTIVITY_DEFINITION_ALLOWED_FIELDS, definition, "Activity definition", scope,
    )

    for key in ("name", "description"):
        if key in definition:
            validate_lang_map(
                definition[key], f"Activity definition {key}", scope.child(key),
            )
    for key in ("type", "moreInfo"):
        if key in definition:
            validate_iri(definition[key], f"Activity definition {key}", scope.child(key))

    has_type = "interactionType" in definition
    interaction_type = _parse_interaction_type(definition, scope)

    if "correctResponsesPattern" in definition:
        if not has_type:
            scope.report(
                ViolationKind.MISSING_INTERACTION_TYPE,
                "interactionType must be given when correctResponsesPattern is used",
            )
        _validate_correct_responses(
            definition["correctResponsesPattern"],
            scope.child("correctResponsesPattern"),
        )

    components = [key for key in INTERACTION_COMPONENTS if key in definition]
    if components and not has_type:
        scope.report(
            ViolationKind.MISSING_INTERACTION_TYPE,
            "interactionType must be given when using interaction components",
            components=components,
        )
    if interaction_type is not None:
        validate_interaction_components(interaction_type, definition, scope)

    if "extensions" in definition:
        validate_extensions(
            definition["extensions"], "Activity definition extensions",
            scope.child("extensions"),
        )


def _parse_interaction_type(
    definition: Mapping, scope: ValidationScope,
) -> InteractionType | None:
    if "interactionType" not in definition:
        return None
    raw = definition["interactionType"]
    try:
        return InteractionType(raw)
    except ValueError:
        scope.report(
            ViolationKind.INVALID_INTERACTION_TYPE,
            f"Activity definition interactionType {raw!r} is not valid",
            allowed=[member.value for member in InteractionType],
        )
        return None


def _validate_correct_responses(pattern: object, scope: ValidationScope) -> None:
    if not check_if_list(pattern, "Activity definition correctResponsesPattern", scope):
        return
    if not all(isinstance(answer, str) for answer in pattern):
        scope.report(
            ViolationKind.INVALID_CORRECT_RESPONSES_PATTERN,
            "Activity definition correctResponsesPattern answers must all be strings",
        )


# ─── Interaction components ──────────────────────────────────────

def validate_interaction_components(
    interaction_type: InteractionType, definition: Mapping, scope: ValidationScope,
) -> None:
    expected = INTERACTION_COMPONENTS_BY_TYPE[interaction_type]
    not_allowed = [
        key for key in INTERACTION_COMPONENTS
        if key in definition and key not in expected
    ]
    if not_allowed:
        scope.report(
            ViolationKind.INVALID_INTERACTION_COMPONENT,
            f"Only interaction component field(s) allowed for {interaction_type.value} "
            f"({', '.join(expected) or 'none'}) - not allowed: {', '.join(not_allowed)}",
            interaction_type=interaction_type.value,
            allowed=list(expected),
            not_allowed=not_allowed,
        )
    for component in expected:
        if component not in definition:
            scope.report(
                ViolationKind.MISSING_INTERACTION_COMPONENT,
                f"{component} is required when interactionType is {interaction_type.value}",
                interaction_type=interaction_type.value,
                field=component,
            )
            continue
        validate_interaction_activities(
            definition[component], component, scope.child(component),
        )


def validate_interaction_activities(
    activities: object, component: str, scope: ValidationScope,
) -> None:
    """Each entry is {id, description?}; ids are strings and unique in the list."""
    if not check_if_list(activities, f"Interaction component {component}", scope):
        return
    ids: list[str] = []
    for index, activity in enumerate(activities):
        item_scope = scope.child(index)
        name = f"Interaction component {component} entry"
        if not check_if_dict(activity, name, item_scope):
            continue
        check_allowed_fields(INTERACTION_ACTIVITY_ALLOWED_FIELDS, activity, name, item_scope)
        check_required_fields(INTERACTION_ACTIVITY_REQUIRED_FIELDS, activity, name, item_scope)
        if "id" in activity:
            if isinstance(activity["id"], str):
                ids.append(activity["id"])
            else:
                item_scope.report(
                    ViolationKind.INVALID_ID_TYPE,
                    f"Interaction activity in component {component} has an id that is not a string",
                    component=component,
                )
        if "description" in activity:
            validate_lang_map(
                activity["description"], f"{name} description",
                item_scope.child("description"),
            )

    duplicates = sorted(key for key, count in Counter(ids).items() if count > 1)
    if duplicates:
        scope.report(
            ViolationKind.DUPLICATE_IDS,
            f"Duplicate ids found in interaction component {component}: {', '.join(duplicates)}",
            component=component,
            ids=duplicates,
        )
