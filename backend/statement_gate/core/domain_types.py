"""Domain Types — enums for every discriminator and violation kind in the statement grammar.

Invariants:
    - Every violation reported by core/ uses a ViolationKind member
    - ObjectType covers every objectType literal the grammar admits
    - All valid states encoded as Enums — no raw string matching in validators

Design Decisions:
    - str Enums: .value is the exact wire spelling, serializes to JSON without
      custom encoders
"""

from enum import Enum


# ─── Discriminators ──────────────────────────────────────────────

class ObjectType(str, Enum):
    """Values of the `objectType` discriminator."""
    ACTIVITY = "Activity"
    AGENT = "Agent"
    GROUP = "Group"
    SUB_STATEMENT = "SubStatement"
    STATEMENT_REF = "StatementRef"


class Placement(str, Enum):
    """Where an Agent/Group appears — drives objectType defaulting."""
    ACTOR = "actor"
    OBJECT = "object"
    MEMBER = "member"
    AUTHORITY = "authority"
    INSTRUCTOR = "instructor"
    TEAM = "team"
    CONTEXT_AGENT = "contextAgent"
    CONTEXT_GROUP = "contextGroup"


class InteractionType(str, Enum):
    """The 10 interaction types an activity definition may declare."""
    TRUE_FALSE = "true-false"
    CHOICE = "choice"
    FILL_IN = "fill-in"
    LONG_FILL_IN = "long-fill-in"
    MATCHING = "matching"
    PERFORMANCE = "performance"
    SEQUENCING = "sequencing"
    LIKERT = "likert"
    NUMERIC = "numeric"
    OTHER = "other"


class ContextActivityKey(str, Enum):
    """Relations allowed under context.contextActivities."""
    PARENT = "parent"
    GROUPING = "grouping"
    CATEGORY = "category"
    OTHER = "other"


class Destination(str, Enum):
    """Where the shell routes a submission after validation."""
    EXPERIENCES = "experiences"
    EVENTS = "events"


# ─── Violations ──────────────────────────────────────────────────

class ViolationKind(str, Enum):
    """Every kind of violation the validator can report."""
    # Input shape
    EMPTY_DATA = "EMPTY_DATA"
    INVALID_DATA_TYPE = "INVALID_DATA_TYPE"
    BATCH_TOO_LARGE = "BATCH_TOO_LARGE"
    MAX_DEPTH_EXCEEDED = "MAX_DEPTH_EXCEEDED"
    DUPLICATE_ID = "DUPLICATE_ID"

    # Field sets and containers
    INVALID_FIELDS = "INVALID_FIELDS"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_DICT_FORMAT = "INVALID_DICT_FORMAT"
    INVALID_ARRAY_FORMAT = "INVALID_ARRAY_FORMAT"

    # Formats
    INVALID_IRI_TYPE = "INVALID_IRI_TYPE"
    INVALID_IRI_FORMAT = "INVALID_IRI_FORMAT"
    INVALID_UUID_TYPE = "INVALID_UUID_TYPE"
    INVALID_UUID_FORMAT = "INVALID_UUID_FORMAT"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    ILLEGAL_TIMESTAMP_OFFSET = "ILLEGAL_TIMESTAMP_OFFSET"
    INVALID_DURATION = "INVALID_DURATION"
    INVALID_EMAIL_TYPE = "INVALID_EMAIL_TYPE"
    INVALID_EMAIL_FORMAT = "INVALID_EMAIL_FORMAT"
    INVALID_SHA1SUM_TYPE = "INVALID_SHA1SUM_TYPE"
    INVALID_SHA1SUM_FORMAT = "INVALID_SHA1SUM_FORMAT"
    INVALID_LANGUAGE_CODE = "INVALID_LANGUAGE_CODE"
    INVALID_LANGUAGE_MAP_VALUE = "INVALID_LANGUAGE_MAP_VALUE"
    EMPTY_LANGUAGE_MAP_VALUE = "EMPTY_LANGUAGE_MAP_VALUE"

    # Statement
    INVALID_VERSION_TYPE = "INVALID_VERSION_TYPE"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    INVALID_OBJECT_TYPE = "INVALID_OBJECT_TYPE"
    MISSING_OBJECT_TYPE = "MISSING_OBJECT_TYPE"
    NESTED_SUB_STATEMENT = "NESTED_SUB_STATEMENT"

    # Agents and groups
    INVALID_IFI_COUNT_FOR_AGENT = "INVALID_IFI_COUNT_FOR_AGENT"
    INVALID_IFI_COUNT_FOR_GROUP = "INVALID_IFI_COUNT_FOR_GROUP"
    MISSING_MEMBER_IN_ANONYMOUS_GROUP = "MISSING_MEMBER_IN_ANONYMOUS_GROUP"
    INVALID_MEMBER_LIST = "INVALID_MEMBER_LIST"
    INVALID_GROUP_MEMBER = "INVALID_GROUP_MEMBER"
    INVALID_NAME_TYPE_FOR_AGENT = "INVALID_NAME_TYPE_FOR_AGENT"
    INVALID_NAME_TYPE_FOR_GROUP = "INVALID_NAME_TYPE_FOR_GROUP"
    INVALID_ACCOUNT_NAME_TYPE = "INVALID_ACCOUNT_NAME_TYPE"
    INVALID_AUTHORITY_GROUP_SIZE = "INVALID_AUTHORITY_GROUP_SIZE"
    INVALID_AUTHORITY_GROUP_IFI = "INVALID_AUTHORITY_GROUP_IFI"

    # Activities
    INVALID_INTERACTION_TYPE = "INVALID_INTERACTION_TYPE"
    MISSING_INTERACTION_TYPE = "MISSING_INTERACTION_TYPE"
    MISSING_INTERACTION_COMPONENT = "MISSING_INTERACTION_COMPONENT"
    INVALID_INTERACTION_COMPONENT = "INVALID_INTERACTION_COMPONENT"
    INVALID_CORRECT_RESPONSES_PATTERN = "INVALID_CORRECT_RESPONSES_PATTERN"
    INVALID_ID_TYPE = "INVALID_ID_TYPE"
    DUPLICATE_IDS = "DUPLICATE_IDS"

    # Result
    INVALID_RESULT_FIELD_TYPE = "INVALID_RESULT_FIELD_TYPE"
    INVALID_SCORE_VALUE = "INVALID_SCORE_VALUE"
    INVALID_SCALED_SCORE = "INVALID_SCALED_SCORE"
    INVALID_SCORE_RANGE = "INVALID_SCORE_RANGE"
    SCORE_OUT_OF_RANGE = "SCORE_OUT_OF_RANGE"

    # Context
    INVALID_CONTEXT_TEAM = "INVALID_CONTEXT_TEAM"
    INVALID_CONTEXT_ACTIVITY_TYPE = "INVALID_CONTEXT_ACTIVITY_TYPE"
    INVALID_CONTEXT_ACTIVITIES_FORMAT = "INVALID_CONTEXT_ACTIVITIES_FORMAT"
    INVALID_CONTEXT_FIELD_TYPE = "INVALID_CONTEXT_FIELD_TYPE"
    INVALID_CONTEXT_FIELD_FOR_OBJECT = "INVALID_CONTEXT_FIELD_FOR_OBJECT"

    # Attachments
    MISSING_ATTACHMENT_SHA2 = "MISSING_ATTACHMENT_SHA2"
    INVALID_ATTACHMENT_SHA2_TYPE = "INVALID_ATTACHMENT_SHA2_TYPE"
    INVALID_ATTACHMENT_SHA2_FORMAT = "INVALID_ATTACHMENT_SHA2_FORMAT"
    INVALID_ATTACHMENT_LENGTH_TYPE = "INVALID_ATTACHMENT_LENGTH_TYPE"
    INVALID_ATTACHMENT_CONTENT_TYPE = "INVALID_ATTACHMENT_CONTENT_TYPE"
