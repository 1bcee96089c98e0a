"""Arrays of primitive items declared as ``<element-array>`` with ``<item>`` children."""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from ..logging import get_logger
from ..models import ArrayValue, ResourceKey, ResourceKind, ResourceNode, ResourceOrigin
from ..parsing.ast import ParsedResource
from ..utils import python_string
from .base import EmitContext, ResourceType, constant_line
from .number import DECIMAL_PATTERN, INTEGER_PATTERN

_LOGGER = get_logger("types.array")

_BOOL_ITEMS = {"true": True, "false": False}
_PYTHON_TYPES = {"int": "int", "float": "float", "bool": "bool"}


def _convert_item(element: str, text: str) -> object:
    if element == "int":
        if not INTEGER_PATTERN.match(text):
            raise ValueError(text)
        return int(text)
    if element == "float":
        if not (INTEGER_PATTERN.match(text) or DECIMAL_PATTERN.match(text)):
            raise ValueError(text)
        value = float(text)
        if not math.isfinite(value):
            raise ValueError(text)
        return value
    if element == "bool":
        if text not in _BOOL_ITEMS:
            raise ValueError(text)
        return _BOOL_ITEMS[text]
    return text


class ArrayType(ResourceType):
    """Every ``*-array`` declaration; the element kind rides on the node's kind."""

    name = "array"
    xml_tags = ("array",)

    def resource_kind(self) -> ResourceKind:
        return ResourceKind.array("string")

    def handles(self, kind: ResourceKind) -> bool:
        return kind.tag == "array"

    def build_node(self, parsed: ParsedResource, origin: ResourceOrigin) -> Optional[ResourceNode]:
        if parsed.tag != "array" or not parsed.element:
            return None
        items: List[object] = []
        for index, text in enumerate(parsed.items):
            try:
                items.append(_convert_item(parsed.element, text))
            except ValueError:
                _LOGGER.warning(
                    "Dropping %s-array '%s': item %d ('%s') is not a valid %s",
                    parsed.element,
                    parsed.name,
                    index,
                    text,
                    parsed.element,
                )
                return None
        value = ArrayValue(element=parsed.element, items=tuple(items))
        return ResourceNode(kind=ResourceKind.array(parsed.element), value=value, origin=origin)

    def emit_code(self, key: ResourceKey, node: ResourceNode, indent: int, context: EmitContext) -> Optional[str]:
        value = node.value
        if not isinstance(value, ArrayValue):
            return None
        context.use_typing("Final", "Tuple")
        item_type = _PYTHON_TYPES.get(value.element, "str")
        return constant_line(key, f"Tuple[{item_type}, ...]", _tuple_literal(value.items), indent, context)


def _tuple_literal(items: Tuple[object, ...]) -> str:
    rendered = [python_string(item) if isinstance(item, str) else repr(item) for item in items]
    if len(rendered) == 1:
        return f"({rendered[0]},)"
    return f"({', '.join(rendered)})"
