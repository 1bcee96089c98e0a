"""Dimension resources such as ``16dp``."""

from __future__ import annotations

from ..models import DIMENSION, DimensionValue
from .string import TextResourceType


class DimensionType(TextResourceType):
    name = "dimension"
    xml_tags = ("dimension",)
    kind = DIMENSION
    literal_factory = DimensionValue
