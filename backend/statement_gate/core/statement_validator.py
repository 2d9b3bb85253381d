"""Statement Validator — batch entry point over one statement or a list of them.

Invariants:
    - Never raises for malformed input: EMPTY_DATA / INVALID_DATA_TYPE /
      BATCH_TOO_LARGE are entries in the error list like any other violation
    - Every call owns a fresh sink; validating the same document twice yields
      an identical result
    - Each repeat of an already-seen top-level id yields one DUPLICATE_ID
    - Input is never mutated

Design Decisions:
    - One sink shared across all statements of a batch: violations keep
      discovery order and carry statements[i] paths
    - Oversized batches are rejected before any element is walked, bounding
      work on adversarial input together with ValidationLimits.max_depth
"""

from collections.abc import Mapping, Sequence

from statement_gate.core.domain_types import ViolationKind
from statement_gate.core.enforce_statement import validate_statement
from statement_gate.core.violations import (
    ValidationLimits,
    ValidationResult,
    ValidationScope,
)


def validate_statements(
    data: object, limits: ValidationLimits | None = None,
) -> ValidationResult:
    """Validate a single statement (dict) or a batch (list) of statements.

    Args:
        data: Already-parsed JSON document.
        limits: Depth and batch size bounds; defaults to ValidationLimits().

    Returns:
        ValidationResult with valid=True iff no violation was found.
    """
    limits = limits or ValidationLimits()

    if data is None or data == "" or (isinstance(data, list) and not data):
        scope = ValidationScope.root("statement", limits)
        scope.report(ViolationKind.EMPTY_DATA, "No data provided")
        return scope.result()

    if isinstance(data, list):
        return _validate_batch(data, limits)

    scope = ValidationScope.root("statement", limits)
    if isinstance(data, Mapping):
        validate_statement(data, scope)
    else:
        scope.report(
            ViolationKind.INVALID_DATA_TYPE,
            f"There are no statements to validate, payload: {type(data).__name__}",
            received=type(data).__name__,
        )
    return scope.result()


def _validate_batch(statements: list, limits: ValidationLimits) -> ValidationResult:
    scope = ValidationScope.root("statements", limits)
    if len(statements) > limits.max_batch_size:
        scope.report(
            ViolationKind.BATCH_TOO_LARGE,
            f"Batch of {len(statements)} statements exceeds the maximum of "
            f"{limits.max_batch_size}",
            size=len(statements),
            max_batch_size=limits.max_batch_size,
        )
        return scope.result()

    for statement_id, index in find_duplicate_ids(statements):
        scope.child(index).report(
            ViolationKind.DUPLICATE_ID,
            f"Statements in batch have duplicate id: {statement_id}",
            id=statement_id,
        )
    for index, statement in enumerate(statements):
        validate_statement(statement, _element_scope(scope, index))
    return scope.result()


def _element_scope(batch: ValidationScope, index: int) -> ValidationScope:
    # Elements start at depth 0, same as a single statement.
    return ValidationScope(batch.sink, batch.limits, f"{batch.path}[{index}]")


def find_duplicate_ids(statements: Sequence) -> list[tuple[str, int]]:
    """(id, index) for every statement whose string id was already seen earlier."""
    seen: set[str] = set()
    duplicates: list[tuple[str, int]] = []
    for index, statement in enumerate(statements):
        if not isinstance(statement, Mapping):
            continue
        statement_id = statement.get("id")
        if not isinstance(statement_id, str):
            continue
        if statement_id in seen:
            duplicates.append((statement_id, index))
        else:
            seen.add(statement_id)
    return duplicates
