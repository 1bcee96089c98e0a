"""Core data models shared across resgen components."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True, order=True)
class ResourceKey:
    """Namespace path plus leaf name identifying a resource."""

    namespace: Tuple[str, ...]
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, tuple):
            object.__setattr__(self, "namespace", tuple(self.namespace))

    @classmethod
    def from_path(cls, path: str) -> "ResourceKey":
        """Split a slash-delimited path; the last segment becomes the name."""
        parts = [part for part in path.split("/") if part]
        name = parts.pop() if parts else ""
        return cls(namespace=tuple(parts), name=name)

    @property
    def full_name(self) -> str:
        if not self.namespace:
            return self.name
        return "/".join((*self.namespace, self.name))

    @property
    def segments(self) -> Tuple[str, ...]:
        return (*self.namespace, self.name)

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class ResourceKind:
    """Kind tag driving dispatch to a type handler.

    Arrays carry their element kind in ``element`` and custom kinds carry the
    plug-in supplied name there as well.
    """

    tag: str
    element: Optional[str] = None

    @classmethod
    def array(cls, element: str) -> "ResourceKind":
        return cls("array", element)

    @classmethod
    def custom(cls, name: str) -> "ResourceKind":
        return cls("custom", name)

    @property
    def label(self) -> str:
        if self.tag == "array":
            return f"{self.element}-array"
        if self.tag == "custom":
            return str(self.element)
        return self.tag


STRING = ResourceKind("string")
NUMBER = ResourceKind("number")
BOOL = ResourceKind("bool")
COLOR = ResourceKind("color")
URL = ResourceKind("url")
DIMENSION = ResourceKind("dimension")
TEMPLATE = ResourceKind("template")


# Explicit numeric types accepted by ``<number type="...">``.
NUMBER_TYPES: Tuple[str, ...] = ("i8", "i16", "i32", "i64", "u8", "u16", "u32", "u64", "f32", "f64")


@dataclass(frozen=True)
class StringValue:
    text: str


@dataclass(frozen=True)
class IntNumber:
    """Integer literal that fits a signed 64-bit value."""

    value: int


@dataclass(frozen=True)
class FloatNumber:
    """Decimal literal with at most 15 significant digits."""

    value: float


@dataclass(frozen=True)
class BigDecimalNumber:
    """Literal kept verbatim because it needs arbitrary precision."""

    literal: str


@dataclass(frozen=True)
class TypedNumber:
    """Literal validated against an explicit numeric type such as ``i8``."""

    literal: str
    number_type: str


NumberValue = Union[IntNumber, FloatNumber, BigDecimalNumber, TypedNumber]


@dataclass(frozen=True)
class BoolValue:
    flag: bool


@dataclass(frozen=True)
class ColorValue:
    text: str


@dataclass(frozen=True)
class UrlValue:
    text: str


@dataclass(frozen=True)
class DimensionValue:
    text: str


@dataclass(frozen=True)
class ArrayValue:
    """Ordered primitive items of a single element kind."""

    element: str
    items: Tuple[object, ...]


@dataclass(frozen=True)
class Reference:
    """Pointer to another resource, written ``@type/key``."""

    resource_type: str
    key: ResourceKey

    @property
    def token(self) -> str:
        return f"@{self.resource_type}/{self.key.full_name}"


@dataclass(frozen=True)
class TextPart:
    text: str


InterpolationPart = Union[TextPart, Reference]


@dataclass(frozen=True)
class InterpolatedString:
    """Literal text with embedded references, resolved at build time."""

    parts: Tuple[InterpolationPart, ...]

    @property
    def references(self) -> Tuple[Reference, ...]:
        return tuple(part for part in self.parts if isinstance(part, Reference))


@dataclass(frozen=True)
class TemplateParam:
    """Declared template parameter.

    ``param_type`` is one of ``string``, ``number``, ``int``, ``float``,
    ``bool`` or ``color``; ``explicit_type`` carries a numeric type hint.
    """

    name: str
    param_type: str
    explicit_type: Optional[str] = None


@dataclass(frozen=True)
class TemplateValue:
    """Template body; ``source_tag`` is the XML tag that declared it."""

    text: str
    params: Tuple[TemplateParam, ...] = ()
    source_tag: str = "template"


ResourceValue = Union[
    StringValue,
    IntNumber,
    FloatNumber,
    BigDecimalNumber,
    TypedNumber,
    BoolValue,
    ColorValue,
    UrlValue,
    DimensionValue,
    ArrayValue,
    Reference,
    InterpolatedString,
    TemplateValue,
]


@dataclass(frozen=True)
class ResourceOrigin:
    """Where a definition came from."""

    file: Path
    is_test: bool = False
    line: Optional[int] = None
    profile: Optional[str] = None


@dataclass(frozen=True)
class ResourceNode:
    kind: ResourceKind
    value: ResourceValue
    origin: ResourceOrigin


class ResourceGraph:
    """Every definition of every key, in discovery order.

    The first node of a key is its primary definition. Lists only grow while
    the graph is built and are never empty for a present key.
    """

    def __init__(self) -> None:
        self._nodes: Dict[ResourceKey, List[ResourceNode]] = {}

    def insert(self, key: ResourceKey, node: ResourceNode) -> bool:
        """Append ``node`` under ``key``; return True when the key already existed."""
        existing = self._nodes.get(key)
        if existing is None:
            self._nodes[key] = [node]
            return False
        existing.append(node)
        return True

    def get(self, key: ResourceKey) -> Optional[ResourceNode]:
        nodes = self._nodes.get(key)
        return nodes[0] if nodes else None

    def get_all(self, key: ResourceKey) -> Tuple[ResourceNode, ...]:
        return tuple(self._nodes.get(key, ()))

    def has_duplicates(self, key: ResourceKey) -> bool:
        return len(self._nodes.get(key, ())) > 1

    def keys(self) -> List[ResourceKey]:
        return sorted(self._nodes)

    def items(self) -> Iterator[Tuple[ResourceKey, Tuple[ResourceNode, ...]]]:
        for key in self.keys():
            yield key, tuple(self._nodes[key])

    def primaries(self) -> Iterator[Tuple[ResourceKey, ResourceNode]]:
        for key in self.keys():
            yield key, self._nodes[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
