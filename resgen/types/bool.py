"""Boolean resources."""

from __future__ import annotations

from typing import Optional

from ..models import BOOL, BoolValue, ResourceKey, ResourceKind, ResourceNode, ResourceOrigin
from ..parsing.ast import ParsedResource
from .base import EmitContext, ResourceType, constant_line

_LITERALS = {"true": True, "false": False}


class BoolType(ResourceType):
    name = "bool"
    xml_tags = ("bool",)

    def resource_kind(self) -> ResourceKind:
        return BOOL

    def build_node(self, parsed: ParsedResource, origin: ResourceOrigin) -> Optional[ResourceNode]:
        if parsed.tag != "bool" or parsed.value not in _LITERALS:
            return None
        return ResourceNode(kind=BOOL, value=BoolValue(_LITERALS[parsed.value]), origin=origin)

    def emit_code(self, key: ResourceKey, node: ResourceNode, indent: int, context: EmitContext) -> Optional[str]:
        if not isinstance(node.value, BoolValue):
            return None
        context.use_typing("Final")
        return constant_line(key, "bool", repr(node.value.flag), indent, context)
