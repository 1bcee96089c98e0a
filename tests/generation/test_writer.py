"""Tests for module assembly and output writing."""

from __future__ import annotations

from pathlib import Path

from resgen.generation import FlatAlias, OutputArtifacts, write_output
from resgen.generation.writer import assemble_module_source, format_file_header, format_import_block
from resgen.models import ResourceGraph
from resgen.references import ReferenceResolver
from resgen.types import EmitContext


def _context() -> EmitContext:
    return EmitContext(resolver=ReferenceResolver(ResourceGraph()))


def test_header_names_profile_and_source_count() -> None:
    header = format_file_header("release", 3)

    assert header[0] == header[-1]
    assert "# | Profile: release" in header
    assert "# | Sources: 3 file(s)" in header
    assert all(line.startswith("#") for line in header)


def test_import_block_only_lists_used_names() -> None:
    context = _context()
    assert format_import_block(context) == []

    context.use_typing("Tuple", "Final")
    context.needs_decimal = True
    context.number_types.add("u8")

    assert format_import_block(context) == [
        "from decimal import Decimal",
        "from typing import Final, NewType, Tuple",
    ]


def test_assembled_module_declares_typed_aliases_and_exports() -> None:
    context = _context()
    context.use_typing("Final")
    context.number_types.update({"u8", "i8"})
    body = "class r:\n    SMALL: Final[_I8] = _I8(-3)\n"

    source = assemble_module_source(
        body,
        context,
        [FlatAlias(alias="SMALL", target="r.SMALL")],
        ["r", "SMALL"],
        profile="debug",
        source_count=1,
    )

    lines = source.splitlines()
    assert '_I8 = NewType("I8", int)' in lines
    assert '_U8 = NewType("U8", int)' in lines
    assert lines.index('_I8 = NewType("I8", int)') < lines.index("class r:")
    assert "SMALL = r.SMALL" in lines
    assert source.endswith('__all__ = [\n    "SMALL",\n    "r",\n]\n')

    namespace: dict = {}
    exec(compile(source, "generated.py", "exec"), namespace)
    assert namespace["SMALL"] == -3


def test_write_output_creates_parents_and_counts(tmp_path: Path) -> None:
    artifacts = OutputArtifacts(source='TITLE = "Café"\nNAME = "x"\n')
    target = tmp_path / "build" / "generated" / "resources_generated.py"

    result = write_output(target, artifacts)

    assert target.read_text(encoding="utf-8") == artifacts.source
    assert result.path == target
    assert result.line_count == 2
    assert result.byte_count == len(artifacts.source.encode("utf-8"))
    assert result.byte_count == len(artifacts.source) + 1
