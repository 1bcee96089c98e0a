"""Assembly and writing of the generated Python module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..types import EmitContext
from ..types.number import python_base_type, python_type_alias
from .flat import FlatAlias

GENERATOR_NAME = "resgen"

_HEADER_BORDER = "# x-------------------------------------------x #"
_TYPING_ORDER = ("Final", "NewType", "Tuple")


@dataclass(frozen=True)
class FileWriteResult:
    """Result of writing the generated module.

    ``line_count`` is the number of newline characters written and
    ``byte_count`` the UTF-8 encoded size.
    """

    path: Path
    line_count: int
    byte_count: int


@dataclass(frozen=True)
class OutputArtifacts:
    """Generated module text plus what was learned while producing it."""

    source: str
    warnings: Tuple[str, ...] = ()
    aliases: Tuple[FlatAlias, ...] = ()


def format_file_header(profile: Optional[str], source_count: int) -> List[str]:
    lines = [
        _HEADER_BORDER,
        "# | Resource constants for Python",
        f"# | Generated by {GENERATOR_NAME}; do not edit by hand",
    ]
    if profile:
        lines.append(f"# | Profile: {profile}")
    lines.append(f"# | Sources: {source_count} file(s)")
    lines.append(_HEADER_BORDER)
    return lines


def format_import_block(context: EmitContext) -> List[str]:
    lines: List[str] = []
    if context.needs_decimal:
        lines.append("from decimal import Decimal")
    names = set(context.typing_names)
    if context.number_types:
        names.add("NewType")
    ordered = [name for name in _TYPING_ORDER if name in names]
    ordered.extend(sorted(names.difference(_TYPING_ORDER)))
    if ordered:
        lines.append(f"from typing import {', '.join(ordered)}")
    return lines


def format_number_aliases(context: EmitContext) -> List[str]:
    return [
        f'{python_type_alias(number_type)} = NewType("{number_type.upper()}", {python_base_type(number_type)})'
        for number_type in sorted(context.number_types)
    ]


def format_flat_aliases(aliases: Sequence[FlatAlias]) -> List[str]:
    return [f"{alias.alias} = {alias.target}" for alias in aliases]


def format_all(names: Sequence[str]) -> List[str]:
    lines = ["__all__ = ["]
    lines.extend(f'    "{name}",' for name in sorted(names))
    lines.append("]")
    return lines


def assemble_module_source(
    body: str,
    context: EmitContext,
    aliases: Sequence[FlatAlias],
    exported: Sequence[str],
    profile: Optional[str] = None,
    source_count: int = 0,
) -> str:
    """Join header, imports, typed-number aliases, the ``r`` class and the flat surface."""
    parts: List[str] = list(format_file_header(profile, source_count))
    parts.append('"""Generated resources. Import constants from here; do not edit."""')
    parts.append("")
    parts.append("from __future__ import annotations")

    imports = format_import_block(context)
    if imports:
        parts.append("")
        parts.extend(imports)

    number_aliases = format_number_aliases(context)
    if number_aliases:
        parts.append("")
        parts.extend(number_aliases)

    parts.extend(["", ""])
    parts.append(body.rstrip("\n"))

    flat = format_flat_aliases(aliases)
    if flat:
        parts.extend(["", ""])
        parts.extend(flat)

    parts.append("")
    parts.extend(format_all(exported))
    return "\n".join(parts) + "\n"


def write_output(path: Path, artifacts: OutputArtifacts) -> FileWriteResult:
    """Write the generated module to ``path``, creating parent directories."""
    source = artifacts.source
    path.parent.mkdir(parents=True, exist_ok=True)
    encoded = source.encode("utf-8")
    path.write_bytes(encoded)
    return FileWriteResult(path=path, line_count=source.count("\n"), byte_count=len(encoded))


__all__ = [
    "FileWriteResult",
    "GENERATOR_NAME",
    "OutputArtifacts",
    "assemble_module_source",
    "format_file_header",
    "write_output",
]
