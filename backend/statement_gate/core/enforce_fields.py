"""Field-Set Enforcement — allowed/required field checks and container type gates.

Invariants:
    - check_allowed_fields reports ONE INVALID_FIELDS listing every offender
    - check_required_fields reports one MISSING_REQUIRED_FIELD per absent key
    - check_if_dict / check_if_list return False on mismatch; callers skip
      that subtree only, siblings are still validated
    - is_finite_number rejects booleans, NaN and infinities
"""

import math
from collections.abc import Iterable, Mapping

from statement_gate.core.domain_types import ViolationKind
from statement_gate.core.violations import ValidationScope


def check_if_dict(value: object, name: str, scope: ValidationScope) -> bool:
    if isinstance(value, Mapping):
        return True
    scope.report(
        ViolationKind.INVALID_DICT_FORMAT,
        f"{name} is not a properly formatted dictionary",
        field=name,
    )
    return False


def check_if_list(value: object, name: str, scope: ValidationScope) -> bool:
    if isinstance(value, (list, tuple)):
        return True
    scope.report(
        ViolationKind.INVALID_ARRAY_FORMAT,
        f"{name} is not a properly formatted array",
        field=name,
    )
    return False


def is_finite_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def check_allowed_fields(
    allowed: Iterable[str], obj: Mapping, name: str, scope: ValidationScope,
) -> None:
    """Flag every key of obj that is not in allowed, in one violation."""
    allowed = frozenset(allowed)
    invalid = sorted(str(key) for key in obj if key not in allowed)
    if invalid:
        scope.report(
            ViolationKind.INVALID_FIELDS,
            f"Invalid field(s) found in {name} - {', '.join(invalid)}",
            fields=invalid,
        )


def check_required_fields(
    required: Iterable[str], obj: Mapping, name: str, scope: ValidationScope,
) -> None:
    for key in required:
        if key not in obj:
            scope.report(
                ViolationKind.MISSING_REQUIRED_FIELD,
                f"{key} is missing in {name}",
                field=key,
            )
