"""Numeric resources: integers, floats, arbitrary precision and explicit types."""

from __future__ import annotations

import math
import re
from typing import Dict, Optional, Tuple

from ..models import (
    NUMBER,
    BigDecimalNumber,
    FloatNumber,
    IntNumber,
    NumberValue,
    ResourceKey,
    ResourceKind,
    ResourceNode,
    ResourceOrigin,
    TypedNumber,
)
from ..parsing.ast import ParsedResource
from .base import EmitContext, ResourceBuildError, ResourceType, constant_line

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

MAX_FLOAT_DIGITS = 15
I64_RANGE = (-(2**63), 2**63 - 1)
F32_MAX = 3.4028234663852886e38

INTEGER_RANGES: Dict[str, Tuple[int, int]] = {
    "i8": (-(2**7), 2**7 - 1),
    "i16": (-(2**15), 2**15 - 1),
    "i32": (-(2**31), 2**31 - 1),
    "i64": I64_RANGE,
    "u8": (0, 2**8 - 1),
    "u16": (0, 2**16 - 1),
    "u32": (0, 2**32 - 1),
    "u64": (0, 2**64 - 1),
}
FLOAT_TYPES = ("f32", "f64")
BIGDECIMAL = "bigdecimal"


class NumberRangeError(ResourceBuildError):
    """A literal that does not fit its explicit numeric type."""

    def __init__(self, literal: str, number_type: str, key: str, file: object, reason: str) -> None:
        super().__init__(key, file, f"'{literal}' {reason} for type {number_type}")
        self.literal = literal
        self.number_type = number_type
        self.reason = reason


def significant_digits(literal: str) -> int:
    """Count mantissa digits, ignoring sign, decimal point and leading zeros."""
    mantissa = re.split(r"[eE]", literal, maxsplit=1)[0]
    digits = "".join(char for char in mantissa if char.isdigit()).lstrip("0")
    return len(digits)


def classify_number(literal: str) -> Optional[NumberValue]:
    """Classify a plain literal; ``None`` when it is not a number."""
    literal = literal.strip()
    if INTEGER_PATTERN.match(literal):
        value = int(literal)
        if I64_RANGE[0] <= value <= I64_RANGE[1]:
            return IntNumber(value)
        return BigDecimalNumber(literal)
    if not DECIMAL_PATTERN.match(literal):
        return None
    if significant_digits(literal) > MAX_FLOAT_DIGITS:
        return BigDecimalNumber(literal)
    value = float(literal)
    if not math.isfinite(value):
        return BigDecimalNumber(literal)
    return FloatNumber(value)


def typed_number(literal: str, number_type: str) -> NumberValue:
    """Validate ``literal`` against ``number_type``; raise ``ValueError`` with the reason."""
    literal = literal.strip()
    number_type = number_type.strip().lower()
    if number_type == BIGDECIMAL:
        if not (INTEGER_PATTERN.match(literal) or DECIMAL_PATTERN.match(literal)):
            raise ValueError("is not a valid decimal literal")
        return BigDecimalNumber(literal)
    if number_type in INTEGER_RANGES:
        if not INTEGER_PATTERN.match(literal):
            raise ValueError("is not an integer literal")
        low, high = INTEGER_RANGES[number_type]
        value = int(literal)
        if not low <= value <= high:
            raise ValueError(f"is out of range [{low}, {high}]")
        return TypedNumber(str(value), number_type)
    if number_type in FLOAT_TYPES:
        if not (INTEGER_PATTERN.match(literal) or DECIMAL_PATTERN.match(literal)):
            raise ValueError("is not a floating point literal")
        value = float(literal)
        if not math.isfinite(value):
            raise ValueError("is not finite")
        if number_type == "f32" and abs(value) > F32_MAX:
            raise ValueError("is out of range")
        return TypedNumber(repr(value), number_type)
    raise ValueError("uses an unsupported number type")


def python_type_alias(number_type: str) -> str:
    """Module-level ``NewType`` name for ``number_type``: ``i8`` is ``_I8``."""
    return f"_{number_type.upper()}"


def python_base_type(number_type: str) -> str:
    return "float" if number_type in FLOAT_TYPES else "int"


class NumberType(ResourceType):
    name = "number"
    xml_tags = ("number", "int", "float")

    def resource_kind(self) -> ResourceKind:
        return NUMBER

    def build_node(self, parsed: ParsedResource, origin: ResourceOrigin) -> Optional[ResourceNode]:
        if parsed.tag not in self.xml_tags or not parsed.value:
            return None
        if parsed.explicit_type:
            try:
                value = typed_number(parsed.value, parsed.explicit_type)
            except ValueError as exc:
                raise NumberRangeError(parsed.value, parsed.explicit_type, parsed.name, origin.file, str(exc)) from exc
        else:
            value = classify_number(parsed.value)
            if value is None:
                return None
        return ResourceNode(kind=NUMBER, value=value, origin=origin)

    def emit_code(self, key: ResourceKey, node: ResourceNode, indent: int, context: EmitContext) -> Optional[str]:
        value = node.value
        context.use_typing("Final")
        if isinstance(value, IntNumber):
            return constant_line(key, "int", str(value.value), indent, context)
        if isinstance(value, FloatNumber):
            return constant_line(key, "float", repr(value.value), indent, context)
        if isinstance(value, BigDecimalNumber):
            context.needs_decimal = True
            return constant_line(key, "Decimal", f'Decimal("{value.literal}")', indent, context)
        if isinstance(value, TypedNumber):
            context.number_types.add(value.number_type)
            alias = python_type_alias(value.number_type)
            return constant_line(key, alias, f"{alias}({value.literal})", indent, context)
        return None


__all__ = [
    "NumberRangeError",
    "NumberType",
    "classify_number",
    "python_base_type",
    "python_type_alias",
    "significant_digits",
    "typed_number",
]
