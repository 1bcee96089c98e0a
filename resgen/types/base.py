"""Base classes for resource type handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..logging import get_logger
from ..models import ResourceKey, ResourceKind, ResourceNode, ResourceOrigin
from ..parsing.ast import ParsedResource
from ..references import ReferenceResolver
from ..utils import constant_name, python_string

_LOGGER = get_logger("types")


class ResourceBuildError(ValueError):
    """Raised when a declaration cannot be turned into a resource node."""

    def __init__(self, key: str, file: object, message: str) -> None:
        super().__init__(f"{file}: resource '{key}': {message}")
        self.key = key
        self.file = file


@dataclass
class EmitContext:
    """Shared state for one generation pass.

    Handlers record the imports and typed-number aliases their code needs
    so the writer can emit a minimal preamble. ``attribute_names`` holds the
    names the emitter assigned to keys whose natural attribute was taken.
    """

    resolver: ReferenceResolver
    warnings: List[str] = field(default_factory=list)
    typing_names: Set[str] = field(default_factory=set)
    needs_decimal: bool = False
    number_types: Set[str] = field(default_factory=set)
    attribute_names: Dict[ResourceKey, str] = field(default_factory=dict)

    def warn(self, message: str) -> None:
        _LOGGER.warning(message)
        self.warnings.append(message)

    def attribute_for(self, key: ResourceKey, default: str) -> str:
        return self.attribute_names.get(key, default)

    def use_typing(self, *names: str) -> None:
        self.typing_names.update(names)


class ResourceType(ABC):
    """Contract for handlers that build and emit one kind of resource."""

    name: str = ""
    xml_tags: Tuple[str, ...] = ()

    @abstractmethod
    def resource_kind(self) -> ResourceKind:
        """Kind assigned to nodes built by this handler."""

    def handles(self, kind: ResourceKind) -> bool:
        return kind == self.resource_kind()

    @abstractmethod
    def build_node(self, parsed: ParsedResource, origin: ResourceOrigin) -> Optional[ResourceNode]:
        """Return a node for ``parsed`` or ``None`` to let another handler try."""

    @abstractmethod
    def emit_code(self, key: ResourceKey, node: ResourceNode, indent: int, context: EmitContext) -> Optional[str]:
        """Return Python source for ``node`` indented by ``indent`` spaces."""

    def attribute_name(self, key: ResourceKey, node: ResourceNode) -> str:
        """Name of the class attribute ``emit_code`` defines for ``key``."""
        return constant_name(key.name)


def constant_line(key: ResourceKey, annotation: str, literal: str, indent: int, context: EmitContext) -> str:
    pad = " " * indent
    name = context.attribute_for(key, constant_name(key.name))
    return f"{pad}{name}: Final[{annotation}] = {literal}\n"


def string_constant(key: ResourceKey, text: str, indent: int, context: EmitContext) -> str:
    context.use_typing("Final")
    return constant_line(key, "str", python_string(text), indent, context)


__all__ = [
    "EmitContext",
    "ResourceBuildError",
    "ResourceType",
    "constant_line",
    "string_constant",
]
