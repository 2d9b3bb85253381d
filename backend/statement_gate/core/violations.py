"""Violation Model — accumulated diagnostics, validation limits and the traversal scope.

Invariants:
    - A Violation is {kind, message, detail}; detail always carries "path"
    - Violations are appended to a sink, never raised — one malformed field
      never aborts validation of unrelated fields
    - Every validate_statements() call owns a fresh sink (no hidden state)
    - A node deeper than ValidationLimits.max_depth is reported once and not walked

Design Decisions:
    - ValidationScope over a global error list: path and depth travel with the
      sink, so nested validators need no extra parameters
    - Frozen dataclasses for Violation/ValidationResult/ValidationLimits:
      results can be shared across callers without copying
"""

from dataclasses import dataclass, field
from typing import Any

from statement_gate.core.domain_types import ViolationKind
from statement_gate.core.rule_library import (
    DEFAULT_MAX_BATCH_SIZE,
    DEFAULT_MAX_DEPTH,
)


@dataclass(frozen=True)
class Violation:
    """One conformance defect found in a document."""
    kind: str
    message: str
    detail: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "message": self.message,
            "detail": dict(self.detail),
        }


@dataclass(frozen=True)
class ValidationLimits:
    """Caller-imposed bounds on the work a single validation may do."""
    max_depth: int = DEFAULT_MAX_DEPTH
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE


@dataclass(frozen=True)
class ValidationResult:
    """Verdict plus the full list of violations, in discovery order."""
    errors: tuple[Violation, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def kinds(self) -> list[str]:
        return [error.kind for error in self.errors]

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass
class ValidationScope:
    """Error sink plus the location of the node currently being validated.

    child() shares the sink and extends the path, so every violation knows
    where it was found (e.g. "statement.object.definition.choices[1]").
    """
    sink: list[Violation]
    limits: ValidationLimits
    path: str = "statement"
    depth: int = 0

    @classmethod
    def root(
        cls, path: str = "statement", limits: ValidationLimits | None = None,
    ) -> "ValidationScope":
        return cls(sink=[], limits=limits or ValidationLimits(), path=path)

    def child(self, segment: str | int) -> "ValidationScope":
        if isinstance(segment, int):
            path = f"{self.path}[{segment}]"
        else:
            path = f"{self.path}.{segment}"
        return ValidationScope(self.sink, self.limits, path, self.depth + 1)

    def report(self, kind: ViolationKind, message: str, **detail: Any) -> None:
        self.sink.append(Violation(
            kind=kind.value,
            message=message,
            detail={"path": self.path, **detail},
        ))

    def exceeds_depth(self) -> bool:
        """Report MAX_DEPTH_EXCEEDED and return True when this node is too deep."""
        if self.depth <= self.limits.max_depth:
            return False
        self.report(
            ViolationKind.MAX_DEPTH_EXCEEDED,
            f"Document nesting exceeds the maximum depth of {self.limits.max_depth}",
            max_depth=self.limits.max_depth,
        )
        return True

    def result(self) -> ValidationResult:
        return ValidationResult(errors=tuple(self.sink))
