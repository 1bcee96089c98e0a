"""Reference resolution over a built resource graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from .logging import get_logger
from .models import (
    ArrayValue,
    BigDecimalNumber,
    BoolValue,
    ColorValue,
    DimensionValue,
    FloatNumber,
    IntNumber,
    InterpolatedString,
    Reference,
    ResourceGraph,
    ResourceKey,
    ResourceKind,
    ResourceNode,
    ResourceValue,
    StringValue,
    TemplateValue,
    TextPart,
    TypedNumber,
    UrlValue,
)

_LOGGER = get_logger("references")

TYPE_ALIASES = {"int": "number", "float": "number"}


def canonical_type(resource_type: str) -> str:
    return TYPE_ALIASES.get(resource_type, resource_type)


def kind_matches(resource_type: str, kind: ResourceKind) -> bool:
    wanted = canonical_type(resource_type)
    return kind.tag == wanted or kind.label == wanted


def node_matches(resource_type: str, node: ResourceNode) -> bool:
    """True when ``node`` can answer a ``@resource_type/...`` reference.

    A ``<string>`` holding positional placeholders becomes a template but
    still answers string references with its raw text.
    """
    if kind_matches(resource_type, node.kind):
        return True
    value = node.value
    return (
        canonical_type(resource_type) == "string"
        and isinstance(value, TemplateValue)
        and value.source_tag == "string"
    )


def visit_token(resource_type: str, key: ResourceKey) -> str:
    return f"{canonical_type(resource_type)}:{key.full_name}"


@dataclass(frozen=True)
class ReferenceProblem:
    """An unresolvable reference found in a primary definition."""

    key: ResourceKey
    reference: Reference
    reason: str

    def describe(self) -> str:
        return f"Unresolved reference {self.reference.token} in '{self.key}': {self.reason}"


class ReferenceResolver:
    """Resolves references and interpolations to their literal text.

    Cycles never raise: the repeated reference is replaced by ``@key`` and a
    warning is recorded in :attr:`warnings`.
    """

    def __init__(self, graph: ResourceGraph) -> None:
        self._graph = graph
        self.warnings: List[str] = []

    def resolve_node(self, key: ResourceKey, node: ResourceNode) -> str:
        """Render ``node``'s value as text, starting with ``key`` already visited."""
        own_type = node.kind.label if node.kind.tag == "custom" else node.kind.tag
        visited = {visit_token(own_type, key)}
        return self._render(node.value, visited)

    def resolve(self, reference: Reference, visited: Optional[Set[str]] = None) -> str:
        visited = set() if visited is None else visited
        token = visit_token(reference.resource_type, reference.key)
        if token in visited:
            message = f"Circular reference detected at {reference.token}; substituting '@{reference.key}'"
            _LOGGER.warning(message)
            self.warnings.append(message)
            return f"@{reference.key}"

        target = self._find(reference)
        if target is None:
            return reference.token

        visited.add(token)
        try:
            return self._render(target.value, visited)
        finally:
            visited.discard(token)

    def _find(self, reference: Reference) -> Optional[ResourceNode]:
        node = self._graph.get(reference.key)
        if node is None or not node_matches(reference.resource_type, node):
            return None
        return node

    def _render(self, value: ResourceValue, visited: Set[str]) -> str:
        if isinstance(value, Reference):
            return self.resolve(value, visited)
        if isinstance(value, InterpolatedString):
            return "".join(
                part.text if isinstance(part, TextPart) else self.resolve(part, visited)
                for part in value.parts
            )
        return render_scalar(value)


def render_scalar(value: ResourceValue) -> str:
    """Text form of a value that holds no references."""
    if isinstance(value, (StringValue, ColorValue, UrlValue, DimensionValue, TemplateValue)):
        return value.text
    if isinstance(value, BoolValue):
        return "true" if value.flag else "false"
    if isinstance(value, IntNumber):
        return str(value.value)
    if isinstance(value, FloatNumber):
        return repr(value.value)
    if isinstance(value, (BigDecimalNumber, TypedNumber)):
        return value.literal
    if isinstance(value, ArrayValue):
        return ", ".join(str(item) for item in value.items)
    raise TypeError(f"Cannot render {type(value).__name__} as text")


def references_in(value: ResourceValue) -> List[Reference]:
    if isinstance(value, Reference):
        return [value]
    if isinstance(value, InterpolatedString):
        return list(value.references)
    return []


def find_reference_problems(graph: ResourceGraph, known_types: Iterable[str]) -> List[ReferenceProblem]:
    """Check every reference held by a primary definition, in key order."""
    known = {canonical_type(name) for name in known_types}
    problems: List[ReferenceProblem] = []
    for key, node in graph.primaries():
        for reference in references_in(node.value):
            reason = _problem_for(graph, reference, known)
            if reason is not None:
                problems.append(ReferenceProblem(key=key, reference=reference, reason=reason))
    return problems


def _problem_for(graph: ResourceGraph, reference: Reference, known: Set[str]) -> Optional[str]:
    wanted = canonical_type(reference.resource_type)
    if wanted not in known:
        return f"unknown resource type '{reference.resource_type}'"
    target = graph.get(reference.key)
    if target is None:
        return f"no resource named '{reference.key}'"
    if not node_matches(reference.resource_type, target):
        return f"'{reference.key}' is a {target.kind.label}, not a {reference.resource_type}"
    return None


__all__ = [
    "ReferenceProblem",
    "ReferenceResolver",
    "canonical_type",
    "find_reference_problems",
    "kind_matches",
    "node_matches",
    "references_in",
    "render_scalar",
]
