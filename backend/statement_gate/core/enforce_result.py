"""Result Enforcement — result fields and score bounds.

Invariants:
    - Score values are finite numbers; booleans, NaN and infinities are not
    - min < max when both are present
    - raw lies within whichever of min/max are present
    - scaled lies within [-1, 1]
"""

from statement_gate.core.domain_types import ViolationKind
from statement_gate.core.enforce_fields import (
    check_allowed_fields,
    check_if_dict,
    is_finite_number,
)
from statement_gate.core.enforce_formats import validate_duration, validate_extensions
from statement_gate.core.rule_library import (
    RESULT_ALLOWED_FIELDS,
    RESULT_BOOLEAN_FIELDS,
    SCALED_SCORE_MAX,
    SCALED_SCORE_MIN,
    SCORE_ALLOWED_FIELDS,
    SCORE_NUMERIC_FIELDS,
)
from statement_gate.core.violations import ValidationScope


def validate_result(result: object, scope: ValidationScope) -> None:
    if scope.exceeds_depth():
        return
    if not check_if_dict(result, "Result", scope):
        return
    check_allowed_fields(RESULT_ALLOWED_FIELDS, result, "Result", scope)

    if "score" in result:
        validate_score(result["score"], scope.child("score"))
    for key in RESULT_BOOLEAN_FIELDS:
        if key in result and not isinstance(result[key], bool):
            scope.report(
                ViolationKind.INVALID_RESULT_FIELD_TYPE,
                f"Result {key} must be a boolean",
                field=key,
            )
    if "response" in result and not isinstance(result["response"], str):
        scope.report(
            ViolationKind.INVALID_RESULT_FIELD_TYPE,
            "Result response must be a string",
            field="response",
        )
    if "duration" in result:
        validate_duration(result["duration"], "Result duration", scope.child("duration"))
    if "extensions" in result:
        validate_extensions(
            result["extensions"], "Result extensions", scope.child("extensions"),
        )


def validate_score(score: object, scope: ValidationScope) -> None:
    if not check_if_dict(score, "Score", scope):
        return
    check_allowed_fields(SCORE_ALLOWED_FIELDS, score, "Score", scope)

    values: dict[str, float] = {}
    for key in SCORE_NUMERIC_FIELDS:
        if key not in score:
            continue
        if is_finite_number(score[key]):
            values[key] = score[key]
        else:
            scope.report(
                ViolationKind.INVALID_SCORE_VALUE,
                f"Score {key} is not a finite number",
                field=key,
            )

    scaled = values.get("scaled")
    if scaled is not None and not SCALED_SCORE_MIN <= scaled <= SCALED_SCORE_MAX:
        scope.report(
            ViolationKind.INVALID_SCALED_SCORE,
            f"Score scaled must be between {SCALED_SCORE_MIN} and {SCALED_SCORE_MAX}",
            scaled=scaled,
        )

    low, high, raw = values.get("min"), values.get("max"), values.get("raw")
    if low is not None and high is not None and low >= high:
        scope.report(
            ViolationKind.INVALID_SCORE_RANGE,
            "Score minimum must be less than the maximum",
            min=low, max=high,
        )
    if raw is not None and (
        (low is not None and raw < low) or (high is not None and raw > high)
    ):
        scope.report(
            ViolationKind.SCORE_OUT_OF_RANGE,
            "Score raw value must be between min and max",
            raw=raw, min=low, max=high,
        )
