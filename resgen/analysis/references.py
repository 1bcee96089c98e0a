"""Detection of references that cannot be resolved."""

from __future__ import annotations

from typing import List

from ..references import find_reference_problems
from .base import ERROR, AnalysisContext, AnalysisIssue


class ReferenceValidator:
    name = "references"

    def validate(self, context: AnalysisContext) -> List[AnalysisIssue]:
        return [
            AnalysisIssue(message=problem.describe(), key=problem.key, severity=ERROR)
            for problem in find_reference_problems(context.graph, context.known_types)
        ]
