"""Classification of string-like text into literals, references and interpolations."""

from __future__ import annotations

import re
from typing import List, Optional, Union

from .models import InterpolatedString, InterpolationPart, Reference, ResourceKey, StringValue, TextPart

REFERENCE_PATTERN = re.compile(r"@(\w+)/([\w/]*\w)")

TextValue = Union[StringValue, Reference, InterpolatedString]


def parse_reference(text: str) -> Optional[Reference]:
    """Return a :class:`Reference` when ``text`` is exactly ``@type/key``."""
    if not text.startswith("@") or text.count("@") != 1:
        return None
    if any(char.isspace() for char in text):
        return None
    match = REFERENCE_PATTERN.fullmatch(text)
    if match is None:
        return None
    return Reference(resource_type=match.group(1), key=ResourceKey.from_path(match.group(2)))


def classify_text(text: str) -> TextValue:
    """Classify ``text`` as a whole reference, an interpolation or a literal.

    ``@`` occurrences that are not followed by ``type/key`` stay inside the
    surrounding literal :class:`TextPart`.
    """
    reference = parse_reference(text)
    if reference is not None:
        return reference

    parts: List[InterpolationPart] = []
    cursor = 0
    for match in REFERENCE_PATTERN.finditer(text):
        if match.start() > cursor:
            parts.append(TextPart(text[cursor : match.start()]))
        parts.append(Reference(resource_type=match.group(1), key=ResourceKey.from_path(match.group(2))))
        cursor = match.end()
    if cursor < len(text):
        parts.append(TextPart(text[cursor:]))

    if not any(isinstance(part, Reference) for part in parts):
        return StringValue(text)
    return InterpolatedString(tuple(parts))


__all__ = ["REFERENCE_PATTERN", "TextValue", "classify_text", "parse_reference"]
