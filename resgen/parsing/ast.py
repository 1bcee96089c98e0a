"""Declarations produced by the XML reader, one per resource element."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..models import TemplateParam


@dataclass(frozen=True)
class ParsedResource:
    """A single declaration before any value interpretation.

    ``name`` is the namespace-qualified path (``auth/title``) and ``tag`` the
    element it came from: ``string``, ``number``/``int``/``float``, ``bool``,
    ``color``, ``url``, ``dimension``, ``template``, ``array`` or any other
    leaf element name. Arrays carry their element kind in ``element`` and
    their item texts in ``items``.
    """

    name: str
    tag: str
    value: Optional[str] = None
    explicit_type: Optional[str] = None
    params: Tuple[TemplateParam, ...] = ()
    element: Optional[str] = None
    items: Tuple[str, ...] = ()
    line: Optional[int] = None


@dataclass
class ParsedResourceFile:
    path: Path
    is_test: bool = False
    resources: List[ParsedResource] = field(default_factory=list)


__all__ = ["ParsedResource", "ParsedResourceFile"]
