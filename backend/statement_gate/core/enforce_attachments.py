"""Attachment Enforcement — usage type, display, content metadata and checksum policy.

Invariants:
    - sha2 is required unless fileUrl is given in its place
    - length is a finite number (booleans rejected), contentType a string
"""

from statement_gate.core.domain_types import ViolationKind
from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    check_if_list,
    check_required_fields,
    is_finite_number,
)
from statement_gate.core.enforce_formats import (
    validate_iri,
    validate_lang_map,
    validate_sha2,
)
from statement_gate.core.rule_library import (
    ATTACHMENT_ALLOWED_FIELDS,
    ATTACHMENT_REQUIRED_FIELDS,
)
from statement_gate.core.violations import ValidationScope


def validate_attachments(attachments: object, scope: ValidationScope) -> None:
    if not check_if_list(attachments, "Attachments", scope):
        return
    for index, attachment in enumerate(attachments):
        validate_attachment(attachment, scope.child(index))


def validate_attachment(attachment: object, scope: ValidationScope) -> None:
    if not check_if_dict(attachment, "Attachment", scope):
        return
    check_allowed_fields(ATTACHMENT_ALLOWED_FIELDS, attachment, "Attachment", scope)
    check_required_fields(ATTACHMENT_REQUIRED_FIELDS, attachment, "Attachment", scope)

    if "usageType" in attachment:
        validate_iri(attachment["usageType"], "Attachment usageType", scope.child("usageType"))
    if "fileUrl" in attachment:
        validate_iri(attachment["fileUrl"], "Attachment fileUrl", scope.child("fileUrl"))

    if "sha2" in attachment:
        validate_sha2(attachment["sha2"], scope.child("sha2"))
    elif "fileUrl" not in attachment:
        scope.report(
            ViolationKind.MISSING_ATTACHMENT_SHA2,
            "Attachment sha2 is required when no fileUrl is given",
            field="sha2",
        )

    if "length" in attachment and not is_finite_number(attachment["length"]):
        scope.report(
            ViolationKind.INVALID_ATTACHMENT_LENGTH_TYPE,
            "Attachment length must be a finite number",
            field="length",
        )
    if "contentType" in attachment and not isinstance(attachment["contentType"], str):
        scope.report(
            ViolationKind.INVALID_ATTACHMENT_CONTENT_TYPE,
            "Attachment contentType must be a string",
            field="contentType",
        )

    for key in ("display", "description"):
        if key in attachment:
            validate_lang_map(attachment[key], f"Attachment {key}", scope.child(key))
