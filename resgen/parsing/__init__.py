"""XML parsing of resource files into declarations."""

from __future__ import annotations

from typing import List, Sequence

from ..loader import RawResourceFile
from .ast import ParsedResource, ParsedResourceFile
from .reader import ParseFailure, ParserError, parse_contents


def parse_raw_file(raw: RawResourceFile) -> ParsedResourceFile:
    return parse_contents(raw.path, raw.contents, raw.is_test)


def parse_raw_files(raw_files: Sequence[RawResourceFile]) -> List[ParsedResourceFile]:
    """Parse every file; report all malformed files together via :class:`ParseFailure`."""
    parsed: List[ParsedResourceFile] = []
    errors: List[ParserError] = []
    for raw in raw_files:
        try:
            parsed.append(parse_raw_file(raw))
        except ParserError as exc:
            errors.append(exc)
    if errors:
        raise ParseFailure(errors)
    return parsed


__all__ = [
    "ParseFailure",
    "ParsedResource",
    "ParsedResourceFile",
    "ParserError",
    "parse_raw_file",
    "parse_raw_files",
]
