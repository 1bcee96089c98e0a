"""Resource type handlers and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from ..models import ResourceKind
from .array import ArrayType
from .base import EmitContext, ResourceBuildError, ResourceType
from .bool import BoolType
from .color import ColorType
from .dimension import DimensionType
from .number import NumberRangeError, NumberType
from .string import StringType, TextResourceType
from .template import TemplateType
from .url import UrlType

_ENTRY_POINT_GROUP = "resgen.types"

# Order matters: the first handler returning a node for a declaration wins.
_BUILTIN_FACTORIES: Dict[str, Callable[[], ResourceType]] = {
    "template": TemplateType,
    "string": StringType,
    "number": NumberType,
    "bool": BoolType,
    "color": ColorType,
    "url": UrlType,
    "dimension": DimensionType,
    "array": ArrayType,
}


class TypeRegistry:
    """Ordered collection of type handlers."""

    def __init__(self, types: Optional[Iterable[ResourceType]] = None) -> None:
        self._types: List[ResourceType] = []
        for handler in types or ():
            self.register(handler)

    def register(self, handler: ResourceType) -> None:
        if self.find_by_name(handler.name) is not None:
            raise ValueError(f"Resource type '{handler.name}' is already registered")
        self._types.append(handler)

    def find_by_name(self, name: str) -> Optional[ResourceType]:
        lowered = name.lower()
        for handler in self._types:
            if handler.name.lower() == lowered:
                return handler
        return None

    def find_by_tag(self, tag: str) -> Optional[ResourceType]:
        handlers = self.handlers_for_tag(tag)
        return handlers[0] if handlers else None

    def handlers_for_tag(self, tag: str) -> List[ResourceType]:
        return [handler for handler in self._types if tag in handler.xml_tags]

    def handler_for(self, kind: ResourceKind) -> Optional[ResourceType]:
        for handler in self._types:
            if handler.handles(kind):
                return handler
        return None

    def all(self) -> List[ResourceType]:
        return list(self._types)

    def names(self) -> List[str]:
        return [handler.name for handler in self._types]

    def __len__(self) -> int:
        return len(self._types)


def discover_types(enabled: Sequence[str] | None = None) -> TypeRegistry:
    """Return a registry of built-in and plug-in handlers, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    registry = TypeRegistry()
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], ResourceType]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, ResourceType):
            raise TypeError(f"Type factory for '{name}' did not return a ResourceType instance")
        registry.register(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - plug-in import failure
            raise RuntimeError(f"Failed to load resource type entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> ResourceType:
            return _coerce_type(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown resource types requested: {missing}")

    return registry


def _coerce_type(obj: object) -> ResourceType:
    if isinstance(obj, ResourceType):
        return obj
    if isinstance(obj, type) and issubclass(obj, ResourceType):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, ResourceType):
            return instance
    raise TypeError("Resource type entry point must be a ResourceType subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ArrayType",
    "BoolType",
    "ColorType",
    "DimensionType",
    "EmitContext",
    "NumberRangeError",
    "NumberType",
    "ResourceBuildError",
    "ResourceType",
    "StringType",
    "TemplateType",
    "TextResourceType",
    "TypeRegistry",
    "UrlType",
    "discover_types",
]
