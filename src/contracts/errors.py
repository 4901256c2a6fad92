"""Shared error types for puzzle parameter contracts."""

from __future__ import annotations


from dataclasses import dataclass, field
from typing import List

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


class ParamsValidationError(ValueError):
    """Raised when a parameter passed directly to the API is out of contract."""

    def __init__(self, code: str, msg: str, path: str) -> None:
        super().__init__(f"{path}: {msg}")
        self.code = code
        self.path = path


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced while re-validating decoded parameters."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of decoding one parameter mapping."""

    ok: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def issues(self) -> List[ValidationIssue]:
        return [*self.errors, *self.warnings]

    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct a warning-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


def make_report(issues: List[ValidationIssue]) -> ValidationReport:
    errors = [issue for issue in issues if issue.severity == SEVERITY_ERROR]
    warnings = [issue for issue in issues if issue.severity != SEVERITY_ERROR]
    return ValidationReport(ok=not errors, errors=errors, warnings=warnings)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "ParamsValidationError",
    "ValidationIssue",
    "ValidationReport",
    "make_report",
    "make_warning",
]
