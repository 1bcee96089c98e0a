"""Color resources such as ``#FF5722``."""

from __future__ import annotations

from ..models import COLOR, ColorValue
from .string import TextResourceType


class ColorType(TextResourceType):
    name = "color"
    xml_tags = ("color",)
    kind = COLOR
    literal_factory = ColorValue
