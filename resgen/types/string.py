"""Plain string resources and the shared base for text-like kinds."""

from __future__ import annotations

from typing import Callable, Optional

from ..models import (
    STRING,
    InterpolatedString,
    Reference,
    ResourceKey,
    ResourceKind,
    ResourceNode,
    ResourceOrigin,
    ResourceValue,
    StringValue,
)
from ..parsing.ast import ParsedResource
from ..values import classify_text
from .base import EmitContext, ResourceType, string_constant


class TextResourceType(ResourceType):
    """Handler for kinds whose value is a single line of text.

    Text starting with ``@`` is classified as a reference or interpolation;
    other text is wrapped by :attr:`literal_factory`.
    """

    kind: ResourceKind = STRING
    literal_factory: Callable[[str], ResourceValue] = StringValue
    classify_always = False

    def resource_kind(self) -> ResourceKind:
        return self.kind

    def build_node(self, parsed: ParsedResource, origin: ResourceOrigin) -> Optional[ResourceNode]:
        if parsed.tag not in self.xml_tags or not parsed.value:
            return None
        return ResourceNode(kind=self.kind, value=self.make_value(parsed.value), origin=origin)

    def make_value(self, text: str) -> ResourceValue:
        if self.classify_always or text.startswith("@"):
            classified = classify_text(text)
            if isinstance(classified, (Reference, InterpolatedString)):
                return classified
        return self.literal_factory(text)

    def emit_code(self, key: ResourceKey, node: ResourceNode, indent: int, context: EmitContext) -> Optional[str]:
        text = context.resolver.resolve_node(key, node)
        return string_constant(key, text, indent, context)


class StringType(TextResourceType):
    name = "string"
    xml_tags = ("string",)
    classify_always = True
