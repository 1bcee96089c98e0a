"""Template resources compiled to functions.

Two placeholder dialects are understood: named ``{param}`` placeholders
backed by declared parameters, and positional ``%1$s``/``%2$d`` placeholders
whose arguments are inferred as ``arg1..argN``. When a body mixes both, the
dialect of the first placeholder in the text decides.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from ..models import (
    TEMPLATE,
    ResourceKey,
    ResourceKind,
    ResourceNode,
    ResourceOrigin,
    TemplateParam,
    TemplateValue,
)
from ..parsing.ast import ParsedResource
from ..utils import constant_name, function_name, python_string, sanitize_identifier
from .base import EmitContext, ResourceBuildError, ResourceType, string_constant
from .number import BIGDECIMAL, FLOAT_TYPES, INTEGER_RANGES, python_type_alias

NAMED_PLACEHOLDER = re.compile(r"\{(\w+)\}")
POSITIONAL_PLACEHOLDER = re.compile(r"%(\d+)\$([sdfxX])")

_POSITIONAL_TYPES = {"s": "str", "d": "int", "f": "float", "x": "int", "X": "int"}
_PARAM_TYPES = {
    "string": "str",
    "color": "str",
    "bool": "bool",
    "int": "int",
    "float": "float",
    "number": "int",
}


def has_positional_placeholders(text: str) -> bool:
    return POSITIONAL_PLACEHOLDER.search(text) is not None


def uses_named_dialect(text: str) -> bool:
    """True when the first placeholder in ``text`` is a ``{name}`` placeholder."""
    named = NAMED_PLACEHOLDER.search(text)
    if named is None:
        return False
    positional = POSITIONAL_PLACEHOLDER.search(text)
    return positional is None or named.start() < positional.start()


def template_dialect(value: TemplateValue) -> Optional[str]:
    """Return ``"named"``, ``"positional"`` or ``None`` for a plain constant."""
    if uses_named_dialect(value.text):
        return "named"
    if has_positional_placeholders(value.text):
        return "positional"
    if value.params:
        return "named"
    return None


def _check_parameter_names(parsed: ParsedResource, origin: ResourceOrigin) -> None:
    seen: Dict[str, str] = {}
    for param in parsed.params:
        identifier = sanitize_identifier(param.name)
        previous = seen.setdefault(identifier, param.name)
        if previous != param.name:
            raise ResourceBuildError(
                parsed.name,
                origin.file,
                f"parameters '{previous}' and '{param.name}' both become argument '{identifier}'",
            )


def _escape_braces(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


class TemplateType(ResourceType):
    """Claims ``<template>`` declarations and strings using ``%N$s`` placeholders."""

    name = "template"
    xml_tags = ("template", "string")

    def resource_kind(self) -> ResourceKind:
        return TEMPLATE

    def build_node(self, parsed: ParsedResource, origin: ResourceOrigin) -> Optional[ResourceNode]:
        if parsed.tag == "template":
            _check_parameter_names(parsed, origin)
            value = TemplateValue(text=parsed.value or "", params=tuple(parsed.params))
        elif parsed.tag == "string" and parsed.value and has_positional_placeholders(parsed.value):
            value = TemplateValue(text=parsed.value, source_tag="string")
        else:
            return None
        return ResourceNode(kind=TEMPLATE, value=value, origin=origin)

    def emit_code(self, key: ResourceKey, node: ResourceNode, indent: int, context: EmitContext) -> Optional[str]:
        value = node.value
        if not isinstance(value, TemplateValue):
            return None
        dialect = template_dialect(value)
        if dialect == "named":
            signature, body = self._named(key, value, context)
        elif dialect == "positional":
            signature, body = self._positional(value.text)
        else:
            return string_constant(key, value.text, indent, context)

        pad = " " * indent
        return (
            f"{pad}@staticmethod\n"
            f"{pad}def {context.attribute_for(key, function_name(key.name))}({signature}) -> str:\n"
            f"{pad}    return {body}\n"
        )

    def attribute_name(self, key: ResourceKey, node: ResourceNode) -> str:
        if isinstance(node.value, TemplateValue) and template_dialect(node.value) is not None:
            return function_name(key.name)
        return constant_name(key.name)

    def _named(self, key: ResourceKey, value: TemplateValue, context: EmitContext) -> Tuple[str, str]:
        identifiers: Dict[str, str] = {}
        arguments: List[str] = []
        for param in value.params:
            if param.name in identifiers:
                continue
            identifier = sanitize_identifier(param.name)
            identifiers[param.name] = identifier
            arguments.append(f"{identifier}: {self._annotation(param, context)}")

        pieces: List[str] = []
        cursor = 0
        for match in NAMED_PLACEHOLDER.finditer(value.text):
            pieces.append(_escape_braces(value.text[cursor : match.start()]))
            placeholder = match.group(1)
            identifier = identifiers.get(placeholder)
            if identifier is None:
                context.warn(f"Template '{key}' uses unknown placeholder {{{placeholder}}}; kept as literal text")
                pieces.append(_escape_braces(match.group(0)))
            else:
                pieces.append(f"{{{identifier}}}")
            cursor = match.end()
        pieces.append(_escape_braces(value.text[cursor:]))

        keywords = ", ".join(f"{identifier}={identifier}" for identifier in identifiers.values())
        return ", ".join(arguments), f"{python_string(''.join(pieces))}.format({keywords})"

    def _positional(self, text: str) -> Tuple[str, str]:
        kinds: Dict[int, str] = {}
        for match in POSITIONAL_PLACEHOLDER.finditer(text):
            kinds.setdefault(int(match.group(1)), match.group(2))
        indices = sorted(set(range(1, max(kinds) + 1)) | set(kinds))

        arguments = [
            f"arg{index}: {_POSITIONAL_TYPES[kinds[index]] if index in kinds else 'str'}" for index in indices
        ]

        pieces: List[str] = []
        cursor = 0
        for match in POSITIONAL_PLACEHOLDER.finditer(text):
            pieces.append(_escape_braces(text[cursor : match.start()]))
            index, conversion = match.group(1), match.group(2)
            pieces.append(f"{{arg{int(index)}:{conversion}}}" if conversion in "xX" else f"{{arg{int(index)}}}")
            cursor = match.end()
        pieces.append(_escape_braces(text[cursor:]))

        keywords = ", ".join(f"arg{index}=arg{index}" for index in indices)
        return ", ".join(arguments), f"{python_string(''.join(pieces))}.format({keywords})"

    def _annotation(self, param: TemplateParam, context: EmitContext) -> str:
        explicit = (param.explicit_type or "").strip().lower()
        if param.param_type in {"number", "int", "float"} and explicit:
            if explicit == BIGDECIMAL:
                context.needs_decimal = True
                return "Decimal"
            if explicit in INTEGER_RANGES or explicit in FLOAT_TYPES:
                context.number_types.add(explicit)
                return python_type_alias(explicit)
        return _PARAM_TYPES.get(param.param_type, "str")


__all__ = [
    "NAMED_PLACEHOLDER",
    "POSITIONAL_PLACEHOLDER",
    "TemplateType",
    "has_positional_placeholders",
    "template_dialect",
]
