"""Rule Library — static field tables, enumerations and patterns for every entity.

Invariants:
    - Module-level data only, built once at import and never mutated
      (frozensets, tuples, MappingProxyType, compiled regexes)
    - Required field tables are tuples: violations are reported in table order

Design Decisions:
    - Separate from the validators: tables are the single source of truth
      for field contracts, validators only walk them
"""

import re
from types import MappingProxyType

from statement_gate.core.domain_types import ContextActivityKey, InteractionType


# ─── Limits ──────────────────────────────────────────────────────

DEFAULT_MAX_DEPTH: int = 32
DEFAULT_MAX_BATCH_SIZE: int = 500
AUTHORITY_GROUP_MEMBER_COUNT: int = 2
SCALED_SCORE_MIN: float = -1.0
SCALED_SCORE_MAX: float = 1.0


# ─── Statement ───────────────────────────────────────────────────

STATEMENT_ALLOWED_FIELDS = frozenset({
    "id", "actor", "verb", "object", "result", "stored", "context",
    "timestamp", "authority", "version", "attachments",
})
STATEMENT_REQUIRED_FIELDS = ("actor", "verb", "object")

SUB_STATEMENT_ALLOWED_FIELDS = frozenset({
    "actor", "verb", "object", "result", "context", "timestamp", "objectType",
})
SUB_STATEMENT_REQUIRED_FIELDS = ("actor", "verb", "object", "objectType")

STATEMENT_REF_FIELDS = ("objectType", "id")


# ─── Agents ──────────────────────────────────────────────────────

AGENT_IFIS = ("mbox", "mbox_sha1sum", "openid", "account")
AGENT_ALLOWED_FIELDS = frozenset({"objectType", "name", *AGENT_IFIS})
GROUP_ALLOWED_FIELDS = AGENT_ALLOWED_FIELDS | {"member"}
ACCOUNT_FIELDS = ("homePage", "name")


# ─── Verb / Activity ─────────────────────────────────────────────

VERB_ALLOWED_FIELDS = frozenset({"id", "display"})
VERB_REQUIRED_FIELDS = ("id",)

ACTIVITY_ALLOWED_FIELDS = frozenset({"objectType", "id", "definition"})
ACTIVITY_REQUIRED_FIELDS = ("id",)

ACTIVITY_DEFINITION_ALLOWED_FIELDS = frozenset({
    "name", "description", "type", "moreInfo", "extensions",
    "interactionType", "correctResponsesPattern",
    "choices", "scale", "source", "target", "steps",
})

INTERACTION_COMPONENTS = ("choices", "scale", "source", "target", "steps")
INTERACTION_ACTIVITY_ALLOWED_FIELDS = frozenset({"id", "description"})
INTERACTION_ACTIVITY_REQUIRED_FIELDS = ("id",)

# Components each interaction type requires; any other component is rejected.
INTERACTION_COMPONENTS_BY_TYPE = MappingProxyType({
    InteractionType.CHOICE: ("choices",),
    InteractionType.SEQUENCING: ("choices",),
    InteractionType.LIKERT: ("scale",),
    InteractionType.MATCHING: ("source", "target"),
    InteractionType.PERFORMANCE: ("steps",),
    InteractionType.TRUE_FALSE: (),
    InteractionType.FILL_IN: (),
    InteractionType.LONG_FILL_IN: (),
    InteractionType.NUMERIC: (),
    InteractionType.OTHER: (),
})


# ─── Result ──────────────────────────────────────────────────────

RESULT_ALLOWED_FIELDS = frozenset({
    "score", "success", "completion", "response", "duration", "extensions",
})
RESULT_BOOLEAN_FIELDS = ("success", "completion")
SCORE_ALLOWED_FIELDS = frozenset({"scaled", "raw", "min", "max"})
SCORE_NUMERIC_FIELDS = ("scaled", "raw", "min", "max")


# ─── Context ─────────────────────────────────────────────────────

CONTEXT_ALLOWED_FIELDS = frozenset({
    "registration", "instructor", "team", "contextActivities", "revision",
    "platform", "language", "statement", "extensions",
    "contextAgents", "contextGroups",
})
CONTEXT_ACTIVITY_KEYS = frozenset(key.value for key in ContextActivityKey)
CONTEXT_ACTIVITY_ONLY_FIELDS = ("revision", "platform")
CONTEXT_AGENT_ALLOWED_FIELDS = frozenset({"objectType", "agent", "relevantTypes"})
CONTEXT_GROUP_ALLOWED_FIELDS = frozenset({"objectType", "group", "relevantTypes"})


# ─── Attachments ─────────────────────────────────────────────────

ATTACHMENT_ALLOWED_FIELDS = frozenset({
    "usageType", "display", "description", "contentType", "length",
    "sha2", "fileUrl",
})
ATTACHMENT_REQUIRED_FIELDS = ("usageType", "display", "contentType", "length")


# ─── Patterns ────────────────────────────────────────────────────

VERSION_PATTERN = re.compile(r"^(1|2)\.0(\.\d+)?\Z", re.ASCII)

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"
)

TIMESTAMP_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt](?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
    r"(?P<offset>[Zz]|[+-]\d{2}(?::?\d{2})?)?\Z",
    re.ASCII,
)
ILLEGAL_TIMESTAMP_OFFSETS = frozenset({"-00", "-0000", "-00:00"})

DURATION_PATTERN = re.compile(
    r"^-?P(?=\d|T\d)(?:\d+Y)?(?:\d+M)?(?:\d+[DW])?"
    r"(?:T(?=\d)(?:\d+H)?(?:\d+M)?(?:\d+(?:\.\d+)?S)?)?\Z",
    re.ASCII,
)

MAILTO_PREFIX = "mailto:"
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\Z")

SHA1_PATTERN = re.compile(r"^[a-fA-F0-9]{40}\Z")
SHA2_PATTERN = re.compile(r"^[a-fA-F0-9]{64}\Z")

LANGUAGE_SUBTAG_PATTERN = re.compile(r"^[A-Za-z0-9]{1,8}\Z")

IRI_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*\Z")
IRI_FORBIDDEN_CHARACTERS = re.compile(r'[\s<>"{}|\\^`\x00-\x1f\x7f]')
