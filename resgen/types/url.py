"""URL resources."""

from __future__ import annotations

from ..models import URL, UrlValue
from .string import TextResourceType


class UrlType(TextResourceType):
    name = "url"
    xml_tags = ("url",)
    kind = URL
    literal_factory = UrlValue
