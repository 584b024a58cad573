"""Validation issues and their aggregation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class Severity(str, Enum):
    """How serious a validation issue is.

    Only errors make a workflow invalid. Warnings point at likely mistakes,
    infos at permitted but unusual shapes.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def symbol(self) -> str:
        return {"error": "✘", "warning": "⚠", "info": "ℹ"}[self.value]


@dataclass(frozen=True)
class ValidationIssue:
    """One finding about a workflow.

    ``status`` names the status the finding is about (its label), or
    ``transition`` the edge id, whichever applies.
    """

    code: str
    message: str
    severity: Severity
    status: str | None = None
    transition: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str | None:
        return self.status or self.transition

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "status": self.status,
            "transition": self.transition,
            "details": self.details,
        }

    def __str__(self) -> str:
        where = f" [{self.location}]" if self.location else ""
        return f"{self.severity.value.upper()}: {self.code}{where} - {self.message}"


@dataclass
class ValidationResult:
    """Issues collected by one or more validators, in discovery order."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def of(self, severity: Severity) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    @property
    def errors(self) -> list[ValidationIssue]:
        return self.of(Severity.ERROR)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return self.of(Severity.WARNING)

    @property
    def infos(self) -> list[ValidationIssue]:
        return self.of(Severity.INFO)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == Severity.ERROR for issue in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(issue.severity == Severity.WARNING for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        """A workflow is valid when nothing was reported at error level."""
        return not self.has_errors

    def codes(self) -> set[str]:
        return {issue.code for issue in self.issues}

    def add(
        self,
        severity: Severity,
        code: str,
        message: str,
        status: str | None = None,
        transition: str | None = None,
        **details: Any,
    ) -> ValidationIssue:
        """Record an issue and return it.

        Extra keyword arguments end up in the issue's ``details``.
        """
        issue = ValidationIssue(
            code=code,
            message=message,
            severity=severity,
            status=status,
            transition=transition,
            details=details,
        )
        self.issues.append(issue)
        return issue

    def add_error(self, code: str, message: str, **kwargs: Any) -> ValidationIssue:
        return self.add(Severity.ERROR, code, message, **kwargs)

    def add_warning(self, code: str, message: str, **kwargs: Any) -> ValidationIssue:
        return self.add(Severity.WARNING, code, message, **kwargs)

    def add_info(self, code: str, message: str, **kwargs: Any) -> ValidationIssue:
        return self.add(Severity.INFO, code, message, **kwargs)

    def merge(self, *others: "ValidationResult") -> "ValidationResult":
        """Append the issues of other results; returns self for chaining."""
        for other in others:
            self.issues.extend(other.issues)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.is_valid,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "issues": [issue.to_dict() for issue in self.issues],
        }

    @classmethod
    def combine(cls, results: Iterable["ValidationResult"]) -> "ValidationResult":
        return cls().merge(*results)
