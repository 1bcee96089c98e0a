"""Construction of the resource graph from parsed declarations."""

from __future__ import annotations

from typing import Iterable, Optional

from .logging import get_logger
from .models import ResourceGraph, ResourceKey, ResourceOrigin
from .parsing.ast import ParsedResource, ParsedResourceFile
from .types import NumberRangeError, ResourceBuildError, TypeRegistry, discover_types

_LOGGER = get_logger("builder")


class ResourceGraphBuilder:
    """Offers each declaration to the handlers registered for its tag."""

    def __init__(self, registry: Optional[TypeRegistry] = None, profile: Optional[str] = None) -> None:
        self.registry = registry if registry is not None else discover_types()
        self.profile = profile
        self.graph = ResourceGraph()
        self.duplicate_count = 0

    @classmethod
    def from_parsed_files(
        cls,
        files: Iterable[ParsedResourceFile],
        registry: Optional[TypeRegistry] = None,
        profile: Optional[str] = None,
    ) -> ResourceGraph:
        builder = cls(registry, profile)
        for parsed_file in files:
            builder.ingest_file(parsed_file)
        return builder.graph

    def ingest_file(self, parsed_file: ParsedResourceFile) -> None:
        for resource in parsed_file.resources:
            origin = ResourceOrigin(
                file=parsed_file.path,
                is_test=parsed_file.is_test,
                line=resource.line,
                profile=self.profile,
            )
            self.ingest(resource, origin)

    def ingest(self, resource: ParsedResource, origin: ResourceOrigin) -> bool:
        """Build and insert one declaration; return False when no handler claimed it."""
        key = ResourceKey.from_path(resource.name)
        for handler in self.registry.handlers_for_tag(resource.tag):
            node = handler.build_node(resource, origin)
            if node is None:
                continue
            if self.graph.insert(key, node):
                self.duplicate_count += 1
                _LOGGER.debug("Duplicate definition of '%s' in %s", key, origin.file)
            return True
        _LOGGER.debug("No handler accepted <%s> '%s' in %s", resource.tag, key, origin.file)
        return False


__all__ = ["NumberRangeError", "ResourceBuildError", "ResourceGraphBuilder"]
