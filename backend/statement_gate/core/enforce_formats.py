"""Format Enforcement — primitive shape checks shared by every entity validator.

Invariants:
    - All functions are PURE: report into the scope, never raise, never mutate
    - A wrong Python type is reported with the *_TYPE kind and the format
      check is skipped
    - ILLEGAL_TIMESTAMP_OFFSET only when the caller asks for it (statement
      timestamp): -00, -0000 and -00:00 are not accepted spellings of UTC

Design Decisions:
    - IRIs parsed with urllib.parse.urlsplit plus a scheme/character guard:
      an absolute IRI needs a scheme and a non-empty remainder
    - Timestamps matched by pattern, then built with datetime() so calendar
      errors (month 13, Feb 30) are caught
    - UUIDs checked as canonical 8-4-4-4-12 hex, version-agnostic
"""

from datetime import datetime, timedelta, timezone
from urllib.parse import urlsplit

from statement_gate.core.domain_types import ViolationKind
from statement_gate.core.enforce_fields import check_if_dict
from statement_gate.core.rule_library import (
    DURATION_PATTERN,
    EMAIL_PATTERN,
    ILLEGAL_TIMESTAMP_OFFSETS,
    IRI_FORBIDDEN_CHARACTERS,
    IRI_SCHEME_PATTERN,
    LANGUAGE_SUBTAG_PATTERN,
    MAILTO_PREFIX,
    SHA1_PATTERN,
    SHA2_PATTERN,
    TIMESTAMP_PATTERN,
    UUID_PATTERN,
)
from statement_gate.core.violations import ValidationScope


# ─── Predicates ──────────────────────────────────────────────────

def is_absolute_iri(value: str) -> bool:
    if not value or IRI_FORBIDDEN_CHARACTERS.search(value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not IRI_SCHEME_PATTERN.match(parts.scheme):
        return False
    return bool(parts.netloc or parts.path or parts.query)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 date-time, or None when it is not one."""
    match = TIMESTAMP_PATTERN.match(value)
    if match is None:
        return None
    fraction = (match.group("fraction") or "").ljust(6, "0")[:6]
    try:
        return datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second") or 0),
            int(fraction),
            tzinfo=_parse_offset(match.group("offset")),
        )
    except ValueError:
        return None


def _parse_offset(offset: str | None) -> timezone | None:
    if offset is None:
        return None
    if offset in ("Z", "z"):
        return timezone.utc
    digits = offset[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:] or 0)
    if minutes >= 60:
        raise ValueError(f"offset minutes out of range: {offset}")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if offset[0] == "-" else delta)


def timestamp_offset(value: str) -> str | None:
    match = TIMESTAMP_PATTERN.match(value)
    return match.group("offset") if match else None


# ─── Identifiers ─────────────────────────────────────────────────

def validate_iri(value: object, field: str, scope: ValidationScope) -> None:
    if not isinstance(value, str):
        scope.report(
            ViolationKind.INVALID_IRI_TYPE,
            f"{field} must be a string type",
            field=field,
        )
        return
    if not is_absolute_iri(value):
        scope.report(
            ViolationKind.INVALID_IRI_FORMAT,
            f"{field} with value {value} is not a valid IRI",
            field=field, value=value,
        )


def validate_uuid(value: object, field: str, scope: ValidationScope) -> None:
    if not isinstance(value, str):
        scope.report(
            ViolationKind.INVALID_UUID_TYPE,
            f"{field} must be a string type",
            field=field,
        )
        return
    if not UUID_PATTERN.match(value):
        scope.report(
            ViolationKind.INVALID_UUID_FORMAT,
            f"{field} - {value} is not a valid UUID",
            field=field, value=value,
        )


def validate_email(value: object, scope: ValidationScope) -> None:
    """mbox must be a mailto: IRI wrapping a conventional address."""
    if not isinstance(value, str):
        scope.report(ViolationKind.INVALID_EMAIL_TYPE, "Email must be a string")
        return
    if not (
        value.startswith(MAILTO_PREFIX)
        and EMAIL_PATTERN.match(value[len(MAILTO_PREFIX):])
    ):
        scope.report(
            ViolationKind.INVALID_EMAIL_FORMAT,
            f"Invalid email format: {value}",
            value=value,
        )


def validate_sha1sum(value: object, scope: ValidationScope) -> None:
    if not isinstance(value, str):
        scope.report(
            ViolationKind.INVALID_SHA1SUM_TYPE,
            "mbox_sha1sum value must be a string type",
        )
        return
    if not SHA1_PATTERN.match(value):
        scope.report(
            ViolationKind.INVALID_SHA1SUM_FORMAT,
            f"Invalid mbox_sha1sum format: {value}",
            value=value,
        )


def validate_sha2(value: object, scope: ValidationScope) -> None:
    if not isinstance(value, str):
        scope.report(
            ViolationKind.INVALID_ATTACHMENT_SHA2_TYPE,
            "Attachment sha2 must be a string",
        )
        return
    if not SHA2_PATTERN.match(value):
        scope.report(
            ViolationKind.INVALID_ATTACHMENT_SHA2_FORMAT,
            f"Not a valid sha2 inside the statement: {value}",
            value=value,
        )


# ─── Time ────────────────────────────────────────────────────────

def validate_timestamp(
    value: object,
    field: str,
    scope: ValidationScope,
    *,
    forbid_negative_zero_offset: bool = False,
) -> None:
    if not isinstance(value, str) or parse_timestamp(value) is None:
        scope.report(
            ViolationKind.INVALID_TIMESTAMP,
            f"{field} error - Error parsing date from {value!r}",
            field=field,
        )
        return
    if forbid_negative_zero_offset and timestamp_offset(value) in ILLEGAL_TIMESTAMP_OFFSETS:
        scope.report(
            ViolationKind.ILLEGAL_TIMESTAMP_OFFSET,
            f"{field} error - Illegal offset {value}",
            field=field, value=value,
        )


def validate_duration(value: object, field: str, scope: ValidationScope) -> None:
    if not isinstance(value, str) or not DURATION_PATTERN.match(value):
        scope.report(
            ViolationKind.INVALID_DURATION,
            f"{field} {value!r} is not an ISO 8601 duration",
            field=field,
        )


# ─── Language ────────────────────────────────────────────────────

def validate_language_tag(tag: object, field: str, scope: ValidationScope) -> None:
    if isinstance(tag, str) and all(
        LANGUAGE_SUBTAG_PATTERN.match(part) for part in tag.split("-")
    ):
        return
    scope.report(
        ViolationKind.INVALID_LANGUAGE_CODE,
        f"Invalid language code in {field}: {tag!r}",
        field=field,
    )


def validate_lang_map(
    value: object,
    field: str,
    scope: ValidationScope,
    *,
    require_values: bool = False,
) -> None:
    """Every key a language tag, every value a string (non-blank if required)."""
    if not check_if_dict(value, field, scope):
        return
    for tag, text in value.items():
        validate_language_tag(tag, field, scope)
        if not isinstance(text, str):
            scope.report(
                ViolationKind.INVALID_LANGUAGE_MAP_VALUE,
                f"{field} value for {tag} must be a string",
                field=field, language=tag,
            )
        elif require_values and not text.strip():
            scope.report(
                ViolationKind.EMPTY_LANGUAGE_MAP_VALUE,
                f"{field} contains an empty value at {tag}",
                field=field, language=tag,
            )


# ─── Extensions ──────────────────────────────────────────────────

def validate_extensions(value: object, field: str, scope: ValidationScope) -> None:
    """Extension keys are IRIs; values are opaque."""
    if not check_if_dict(value, field, scope):
        return
    for key in value:
        validate_iri(key, f"{field} key", scope)
