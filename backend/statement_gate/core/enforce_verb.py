"""Verb Enforcement — id is a required IRI, display a language map with non-blank values."""

from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    check_required_fields,
)
from statement_gate.core.enforce_formats import validate_iri, validate_lang_map
from statement_gate.core.rule_library import VERB_ALLOWED_FIELDS, VERB_REQUIRED_FIELDS
from statement_gate.core.violations import ValidationScope


def validate_verb(verb: object, scope: ValidationScope) -> None:
    if not check_if_dict(verb, "Verb", scope):
        return
    check_allowed_fields(VERB_ALLOWED_FIELDS, verb, "Verb", scope)
    check_required_fields(VERB_REQUIRED_FIELDS, verb, "Verb", scope)
    if "id" in verb:
        validate_iri(verb["id"], "Verb id", scope.child("id"))
    if "display" in verb:
        validate_lang_map(
            verb["display"], "Verb display", scope.child("display"),
            require_values=True,
        )
