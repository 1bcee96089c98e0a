"""Python source generation from a validated resource graph."""

from __future__ import annotations

from typing import List, Optional

from ..analysis import AnalysisResult
from ..logging import get_logger
from ..models import ResourceGraph
from ..references import ReferenceResolver
from ..types import EmitContext, TypeRegistry
from ..types.number import FLOAT_TYPES, INTEGER_RANGES, python_type_alias
from .emitter import ROOT_CLASS, CodeEmitter, EmittedMember
from .flat import FlatAlias, build_flat_aliases
from .tree import NamespaceNode, build_namespace_tree
from .writer import FileWriteResult, OutputArtifacts, assemble_module_source, write_output

_LOGGER = get_logger("generation")

_CLASS_BODY_NAMES = {
    "Decimal",
    "Final",
    "Tuple",
    *(python_type_alias(name) for name in (*INTEGER_RANGES, *FLOAT_TYPES)),
}
_RESERVED_NAMES = {ROOT_CLASS, "NewType", "annotations", *_CLASS_BODY_NAMES}


def emit(
    graph: ResourceGraph,
    registry: TypeRegistry,
    analysis: Optional[AnalysisResult] = None,
    profile: Optional[str] = None,
    source_count: int = 0,
) -> OutputArtifacts:
    """Render ``graph`` as one Python module; identical inputs give identical text."""
    context = EmitContext(resolver=ReferenceResolver(graph))
    emitter = CodeEmitter(graph, registry, context, reserved=_CLASS_BODY_NAMES)
    body = emitter.emit(build_namespace_tree(graph))

    aliases = build_flat_aliases(emitter.members, reserved=_RESERVED_NAMES)
    exported = [ROOT_CLASS, *(alias.alias for alias in aliases)]
    source = assemble_module_source(
        body,
        context,
        aliases,
        exported,
        profile=profile,
        source_count=source_count,
    )

    warnings: List[str] = []
    if analysis is not None:
        warnings.extend(issue.message for issue in analysis.warnings)
    warnings.extend(context.warnings)
    warnings.extend(context.resolver.warnings)
    _LOGGER.debug("Emitted %d member(s) and %d flat alias(es)", len(emitter.members), len(aliases))
    return OutputArtifacts(source=source, warnings=tuple(warnings), aliases=tuple(aliases))


__all__ = [
    "CodeEmitter",
    "EmittedMember",
    "FileWriteResult",
    "FlatAlias",
    "NamespaceNode",
    "OutputArtifacts",
    "build_flat_aliases",
    "build_namespace_tree",
    "emit",
    "write_output",
]
