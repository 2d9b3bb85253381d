"""Agent/Group Enforcement — IFI counting, group membership, accounts and authority.

Invariants:
    - normalize_agent returns a COPY; the caller's mapping is never written to
    - An Agent carries exactly one IFI; a Group carries zero or one
    - A Group without an IFI (Anonymous Group) must list its members
    - Members are Agents: a Group inside member is rejected, not walked
    - An authority Group is an OAuth pair: exactly 2 members, no IFI
    - Every IFI present is validated, even when the count is already wrong

Design Decisions:
    - Placement enum over free-form strings: objectType defaulting and the
      authority rule both key off where the agent appears
"""

from collections.abc import Mapping

from statement_gate.core.domain_types import ObjectType, Placement, ViolationKind
from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    check_required_fields,
)
from statement_gate.core.enforce_formats import (
    validate_email,
    validate_iri,
    validate_sha1sum,
)
from statement_gate.core.rule_library import (
    ACCOUNT_FIELDS,
    AGENT_ALLOWED_FIELDS,
    AGENT_IFIS,
    AUTHORITY_GROUP_MEMBER_COUNT,
    GROUP_ALLOWED_FIELDS,
)
from statement_gate.core.violations import ValidationScope


def normalize_agent(agent: Mapping, placement: Placement) -> dict:
    """Copy of agent with objectType defaulted to Agent outside object placement."""
    normalized = dict(agent)
    if placement is not Placement.OBJECT and "objectType" not in normalized:
        normalized["objectType"] = ObjectType.AGENT.value
    return normalized


def present_ifis(agent: Mapping) -> list[str]:
    return [ifi for ifi in AGENT_IFIS if ifi in agent]


def validate_agent_or_group(
    agent: object, placement: Placement, scope: ValidationScope,
) -> dict | None:
    """Validate an Agent or Group. Returns the normalized copy, None if not a dict."""
    if scope.exceeds_depth():
        return None
    if not check_if_dict(agent, f"Agent in {placement.value}", scope):
        return None

    if placement is Placement.OBJECT and "objectType" not in agent:
        scope.report(
            ViolationKind.MISSING_OBJECT_TYPE,
            "objectType must be set when using an Agent as the object of a statement",
        )
    normalized = normalize_agent(agent, placement)
    object_type = normalized.get("objectType", ObjectType.AGENT.value)

    if object_type == ObjectType.GROUP.value:
        _validate_group(normalized, placement, scope)
    elif object_type == ObjectType.AGENT.value:
        _validate_agent(normalized, scope)
    else:
        scope.report(
            ViolationKind.INVALID_OBJECT_TYPE,
            f"An agent's objectType must be either Agent or Group if given - got {object_type!r}",
            object_type=str(object_type),
        )
    return normalized


def _validate_agent(agent: Mapping, scope: ValidationScope) -> None:
    check_allowed_fields(AGENT_ALLOWED_FIELDS, agent, "Agent", scope)
    if "name" in agent and not isinstance(agent["name"], str):
        scope.report(
            ViolationKind.INVALID_NAME_TYPE_FOR_AGENT,
            "If name is given in Agent, it must be a string",
        )
    ifis = present_ifis(agent)
    if len(ifis) != 1:
        scope.report(
            ViolationKind.INVALID_IFI_COUNT_FOR_AGENT,
            f"One and only one of {', '.join(AGENT_IFIS)} may be supplied with an Agent",
            ifis=ifis,
        )
    _validate_ifis(agent, ifis, scope)


def _validate_group(
    group: Mapping, placement: Placement, scope: ValidationScope,
) -> None:
    check_allowed_fields(GROUP_ALLOWED_FIELDS, group, "Group", scope)
    if "name" in group and not isinstance(group["name"], str):
        scope.report(
            ViolationKind.INVALID_NAME_TYPE_FOR_GROUP,
            "If name is given in Group, it must be a string",
        )
    ifis = present_ifis(group)
    if len(ifis) > 1:
        scope.report(
            ViolationKind.INVALID_IFI_COUNT_FOR_GROUP,
            f"None or one and only one of {', '.join(AGENT_IFIS)} may be supplied with a Group",
            ifis=ifis,
        )
    _validate_ifis(group, ifis, scope)

    if "member" in group:
        validate_members(group["member"], scope.child("member"))
    elif not ifis:
        scope.report(
            ViolationKind.MISSING_MEMBER_IN_ANONYMOUS_GROUP,
            "Anonymous groups must contain member",
        )

    if placement is Placement.AUTHORITY:
        _validate_authority_group(group, ifis, scope)


def validate_members(members: object, scope: ValidationScope) -> None:
    """member must be a non-empty list of Agents."""
    if not isinstance(members, list) or not members:
        scope.report(
            ViolationKind.INVALID_MEMBER_LIST,
            "Member property must contain agents",
        )
        return
    for index, member in enumerate(members):
        member_scope = scope.child(index)
        if isinstance(member, Mapping) and member.get("objectType") == ObjectType.GROUP.value:
            member_scope.report(
                ViolationKind.INVALID_GROUP_MEMBER,
                "Group member value cannot be other groups",
            )
            continue
        validate_agent_or_group(member, Placement.MEMBER, member_scope)


def _validate_authority_group(
    group: Mapping, ifis: list[str], scope: ValidationScope,
) -> None:
    members = group.get("member")
    if not isinstance(members, list) or len(members) != AUTHORITY_GROUP_MEMBER_COUNT:
        scope.report(
            ViolationKind.INVALID_AUTHORITY_GROUP_SIZE,
            f"Groups representing authorities must only contain "
            f"{AUTHORITY_GROUP_MEMBER_COUNT} members",
        )
    if ifis:
        scope.report(
            ViolationKind.INVALID_AUTHORITY_GROUP_IFI,
            "Groups representing authorities must not contain an inverse functional identifier",
            ifis=ifis,
        )


# ─── Inverse Functional Identifiers ──────────────────────────────

def validate_account(account: object, scope: ValidationScope) -> None:
    if not check_if_dict(account, "Account", scope):
        return
    check_allowed_fields(ACCOUNT_FIELDS, account, "Account", scope)
    check_required_fields(ACCOUNT_FIELDS, account, "Account", scope)
    if "homePage" in account:
        validate_iri(account["homePage"], "homePage", scope.child("homePage"))
    if "name" in account and not isinstance(account["name"], str):
        scope.report(
            ViolationKind.INVALID_ACCOUNT_NAME_TYPE,
            "Account name must be a string",
        )


def _validate_openid(value: object, scope: ValidationScope) -> None:
    validate_iri(value, "openid", scope)


_IFI_VALIDATORS = {
    "mbox": validate_email,
    "mbox_sha1sum": validate_sha1sum,
    "openid": _validate_openid,
    "account": validate_account,
}


def _validate_ifis(agent: Mapping, ifis: list[str], scope: ValidationScope) -> None:
    for ifi in ifis:
        _IFI_VALIDATORS[ifi](agent[ifi], scope.child(ifi))
