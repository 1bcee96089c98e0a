"""Core analysis data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from ..models import ResourceGraph, ResourceKey

WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class AnalysisIssue:
    """A single finding about the resource graph."""

    message: str
    key: Optional[ResourceKey] = None
    severity: str = WARNING


@dataclass
class AnalysisResult:
    warnings: List[AnalysisIssue] = field(default_factory=list)
    errors: List[AnalysisIssue] = field(default_factory=list)

    def add(self, issue: AnalysisIssue) -> None:
        if issue.severity == ERROR:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    @property
    def ok(self) -> bool:
        return not self.errors

    def is_empty(self) -> bool:
        return not self.warnings and not self.errors


@dataclass(frozen=True)
class ValidationOptions:
    treat_duplicates_as_errors: bool = False


class AnalysisFailedError(RuntimeError):
    """Raised when analysis reports one or more errors."""

    def __init__(self, message: str, issues: Sequence[AnalysisIssue]) -> None:
        super().__init__(message)
        self.issues = list(issues)


@dataclass
class AnalysisContext:
    """Inputs shared with validators."""

    graph: ResourceGraph
    options: ValidationOptions
    known_types: List[str] = field(default_factory=list)


class Validator(Protocol):
    """Protocol implemented by graph validators."""

    name: str

    def validate(self, context: AnalysisContext) -> List[AnalysisIssue]:
        """Run validation and return any issues."""


__all__ = [
    "ERROR",
    "WARNING",
    "AnalysisContext",
    "AnalysisFailedError",
    "AnalysisIssue",
    "AnalysisResult",
    "ValidationOptions",
    "Validator",
]
