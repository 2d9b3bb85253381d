"""Context Enforcement — tests for registration, team, context activities, agents and groups.

Tests cover:
    - registration UUID, instructor as Agent/Group, team as Group
    - contextActivities keys and single-or-list values
    - contextAgents / contextGroups entry shape
    - revision/platform only with an Activity object
    - language tag and statement reference
"""

import pytest

from statement_gate.core.enforce_context import validate_context
from statement_gate.core.violations import ValidationScope

ACTIVITY = {"id": "http://example.com/activities/course"}
AGENT_OBJECT = {"objectType": "Agent", "mbox": "mailto:peer@example.com"}
REGISTRATION = "ec531277-b57b-4c15-8d91-d292c5b2b8f7"
GROUP = {
    "objectType": "Group",
    "name": "Team A",
    "member": [{"mbox": "mailto:a@example.com"}, {"mbox": "mailto:b@example.com"}],
}


def _kinds(context, statement_object=ACTIVITY) -> list[str]:
    scope = ValidationScope.root()
    validate_context(context, statement_object, scope.child("context"))
    return scope.result().kinds


def test_full_context_is_valid():
    context = {
        "registration": REGISTRATION,
        "instructor": {"name": "Instructor", "mbox": "mailto:instructor@example.com"},
        "team": GROUP,
        "contextActivities": {
            "parent": ACTIVITY,
            "grouping": [ACTIVITY, {"id": "http://example.com/activities/program"}],
        },
        "contextAgents": [{"objectType": "contextAgent", "agent": {"mbox": "mailto:a@example.com"}}],
        "contextGroups": [{
            "objectType": "contextGroup",
            "group": GROUP,
            "relevantTypes": ["http://example.com/types/cohort"],
        }],
        "revision": "v2",
        "platform": "Example LMS",
        "language": "en-US",
        "statement": {"objectType": "StatementRef", "id": REGISTRATION},
        "extensions": {"http://example.com/ext/session": 3},
    }
    assert _kinds(context) == []


def test_context_rejects_unknown_fields():
    assert _kinds({"course": "x"}) == ["INVALID_FIELDS"]


def test_context_must_be_dict():
    assert _kinds("context") == ["INVALID_DICT_FORMAT"]


def test_registration_must_be_uuid():
    assert _kinds({"registration": "abc"}) == ["INVALID_UUID_FORMAT"]


def test_instructor_validated_as_agent():
    assert _kinds({"instructor": {"name": "No IFI"}}) == ["INVALID_IFI_COUNT_FOR_AGENT"]


def test_team_must_be_group():
    assert _kinds({"team": {"mbox": "mailto:a@example.com"}}) == ["INVALID_CONTEXT_TEAM"]


def test_team_group_rules_still_apply():
    assert _kinds({"team": {"objectType": "Group"}}) == ["MISSING_MEMBER_IN_ANONYMOUS_GROUP"]


# ─── contextActivities ───────────────────────────────────────────

def test_context_activities_unknown_key():
    scope = ValidationScope.root()
    validate_context({"contextActivities": {"sibling": ACTIVITY}}, ACTIVITY, scope.child("context"))
    errors = scope.result().errors
    assert [e.kind for e in errors] == ["INVALID_CONTEXT_ACTIVITY_TYPE"]
    assert errors[0].detail["path"] == "statement.context.contextActivities.sibling"


@pytest.mark.parametrize("value", ["http://example.com/a", 3, None])
def test_context_activities_value_shape(value):
    kinds = _kinds({"contextActivities": {"parent": value}})
    assert kinds == ["INVALID_CONTEXT_ACTIVITIES_FORMAT"]


def test_context_activities_entries_validated_as_activities():
    scope = ValidationScope.root()
    validate_context(
        {"contextActivities": {"category": [ACTIVITY, {"id": "bad"}]}},
        ACTIVITY, scope.child("context"),
    )
    errors = scope.result().errors
    assert [e.kind for e in errors] == ["INVALID_IRI_FORMAT"]
    assert errors[0].detail["path"] == "statement.context.contextActivities.category[1].id"


def test_context_activities_must_be_dict():
    assert _kinds({"contextActivities": [ACTIVITY]}) == ["INVALID_DICT_FORMAT"]


# ─── contextAgents / contextGroups ───────────────────────────────

def test_context_agents_must_be_list():
    assert _kinds({"contextAgents": {"objectType": "contextAgent"}}) == ["INVALID_ARRAY_FORMAT"]


def test_context_agent_entry_requires_object_type():
    kinds = _kinds({"contextAgents": [{"agent": {"mbox": "mailto:a@example.com"}}]})
    assert kinds == ["MISSING_OBJECT_TYPE"]


def test_context_group_entry_requires_object_type():
    assert _kinds({"contextGroups": [{"group": GROUP}]}) == ["MISSING_OBJECT_TYPE"]


def test_context_agent_entry_rejects_unknown_fields():
    kinds = _kinds({"contextAgents": [{"objectType": "contextAgent", "group": GROUP}]})
    assert kinds == ["INVALID_FIELDS"]


def test_context_group_must_be_a_group():
    kinds = _kinds({"contextGroups": [{
        "objectType": "contextGroup", "group": {"mbox": "mailto:a@example.com"},
    }]})
    assert kinds == ["INVALID_OBJECT_TYPE"]


def test_relevant_types_are_iris():
    kinds = _kinds({"contextAgents": [{
        "objectType": "contextAgent",
        "agent": {"mbox": "mailto:a@example.com"},
        "relevantTypes": ["http://example.com/types/a", "mentor"],
    }]})
    assert kinds == ["INVALID_IRI_FORMAT"]


# ─── revision / platform ─────────────────────────────────────────

@pytest.mark.parametrize("field", ["revision", "platform"])
def test_revision_and_platform_must_be_strings(field):
    assert _kinds({field: 2}) == ["INVALID_CONTEXT_FIELD_TYPE"]


@pytest.mark.parametrize("field", ["revision", "platform"])
def test_revision_and_platform_need_activity_object(field):
    assert _kinds({field: "x"}, AGENT_OBJECT) == ["INVALID_CONTEXT_FIELD_FOR_OBJECT"]


def test_revision_allowed_with_explicit_activity_object():
    assert _kinds({"revision": "x"}, {"objectType": "Activity", **ACTIVITY}) == []


# ─── language / statement ────────────────────────────────────────

def test_language_must_be_tag():
    assert _kinds({"language": "english_us"}) == ["INVALID_LANGUAGE_CODE"]


def test_statement_must_be_statement_ref():
    kinds = _kinds({"statement": {"objectType": "SubStatement", "id": REGISTRATION}})
    assert kinds == ["INVALID_OBJECT_TYPE"]
