"""Validation of the resource graph before generation."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..logging import get_logger
from ..models import ResourceGraph
from ..types import TypeRegistry, discover_types
from .base import (
    ERROR,
    WARNING,
    AnalysisContext,
    AnalysisFailedError,
    AnalysisIssue,
    AnalysisResult,
    ValidationOptions,
    Validator,
)
from .duplicates import DuplicateKeyValidator
from .references import ReferenceValidator

_LOGGER = get_logger("analysis")


def default_validators() -> List[Validator]:
    return [DuplicateKeyValidator(), ReferenceValidator()]


def validate(
    graph: ResourceGraph,
    options: Optional[ValidationOptions] = None,
    registry: Optional[TypeRegistry] = None,
    validators: Optional[Sequence[Validator]] = None,
) -> AnalysisResult:
    """Run every validator and collect warnings and errors in order."""
    known_types = (registry if registry is not None else discover_types()).names()
    context = AnalysisContext(graph=graph, options=options or ValidationOptions(), known_types=known_types)
    result = AnalysisResult()
    for validator in validators if validators is not None else default_validators():
        issues = validator.validate(context)
        _LOGGER.debug("Validator %s reported %d issue(s)", validator.name, len(issues))
        for issue in issues:
            result.add(issue)
    for issue in result.warnings:
        _LOGGER.warning(issue.message)
    return result


def ensure_valid(result: AnalysisResult) -> None:
    """Raise :class:`AnalysisFailedError` when ``result`` holds errors."""
    if result.errors:
        details = "\n".join(f"  {issue.message}" for issue in result.errors)
        raise AnalysisFailedError(f"Analysis failed with {len(result.errors)} error(s):\n{details}", result.errors)


__all__ = [
    "ERROR",
    "WARNING",
    "AnalysisFailedError",
    "AnalysisIssue",
    "AnalysisResult",
    "DuplicateKeyValidator",
    "ReferenceValidator",
    "ValidationOptions",
    "Validator",
    "ensure_valid",
    "validate",
]
