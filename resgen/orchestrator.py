"""Pipeline coordination: load, parse, build, analyze and generate."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .analysis import AnalysisResult, ValidationOptions, Validator, ensure_valid, validate
from .builder import ResourceGraphBuilder
from .config import BuildPlan
from .generation import FileWriteResult, OutputArtifacts, emit, write_output
from .loader import ResourceLoader
from .logging import get_logger
from .models import ResourceGraph
from .parsing import parse_raw_files
from .types import TypeRegistry, discover_types


@dataclass
class BuildResult:
    """Everything one pipeline run produced."""

    plan: BuildPlan
    graph: ResourceGraph
    analysis: AnalysisResult
    file_count: int
    artifacts: Optional[OutputArtifacts] = None
    written: Optional[FileWriteResult] = None

    @property
    def warnings(self) -> List[str]:
        if self.artifacts is not None:
            return list(self.artifacts.warnings)
        return [issue.message for issue in self.analysis.warnings]


class Orchestrator:
    """Coordinates the resource compilation pipeline."""

    def __init__(
        self,
        loader: ResourceLoader | None = None,
        registry: TypeRegistry | None = None,
        validators: Optional[Iterable[Validator]] = None,
    ) -> None:
        self.loader = loader or ResourceLoader()
        self.registry = registry if registry is not None else discover_types()
        self._validators = list(validators) if validators is not None else None
        self.logger = get_logger("orchestrator")

    def run_check(self, plan: BuildPlan) -> BuildResult:
        """Run everything up to analysis; raise when analysis reports errors."""
        self.logger.info("Checking resources in %s (profile=%s)", plan.resources_dir, plan.profile)
        raw_files = self.loader.load(plan)
        self.logger.debug("Loader returned %d file(s)", len(raw_files))

        parsed = parse_raw_files(raw_files)
        graph = ResourceGraphBuilder.from_parsed_files(parsed, self.registry, plan.profile)
        self.logger.debug("Resource graph holds %d key(s)", len(graph))

        analysis = validate(
            graph,
            ValidationOptions(treat_duplicates_as_errors=plan.treat_duplicates_as_errors),
            self.registry,
            self._validators,
        )
        ensure_valid(analysis)
        return BuildResult(plan=plan, graph=graph, analysis=analysis, file_count=len(raw_files))

    def run_build(self, plan: BuildPlan, output: Path | None = None) -> BuildResult:
        """Run the whole pipeline; write the module when ``output`` is given."""
        result = self.run_check(plan)
        artifacts = emit(
            result.graph,
            self.registry,
            result.analysis,
            profile=plan.profile,
            source_count=result.file_count,
        )
        result.artifacts = artifacts
        if output is not None:
            result.written = write_output(output, artifacts)
            self.logger.info(
                "Wrote %d line(s) to %s", result.written.line_count, result.written.path
            )
        return result


__all__ = ["BuildResult", "Orchestrator"]
