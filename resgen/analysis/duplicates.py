"""Detection of keys defined more than once."""

from __future__ import annotations

from typing import List

from .base import ERROR, WARNING, AnalysisContext, AnalysisIssue


class DuplicateKeyValidator:
    """Reports every key with more than one definition; the first one wins."""

    name = "duplicates"

    def validate(self, context: AnalysisContext) -> List[AnalysisIssue]:
        severity = ERROR if context.options.treat_duplicates_as_errors else WARNING
        issues: List[AnalysisIssue] = []
        for key, nodes in context.graph.items():
            if len(nodes) < 2:
                continue
            files = [str(node.origin.file) for node in nodes]
            message = (
                f"Duplicate resource key '{key.full_name}' defined in {len(nodes)} files. "
                f"Using '{files[0]}' (first occurrence). Duplicates in: {', '.join(files[1:])}"
            )
            issues.append(AnalysisIssue(message=message, key=key, severity=severity))
        return issues
