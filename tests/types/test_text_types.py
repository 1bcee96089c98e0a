"""Tests for string-like, bool and array handlers."""

from __future__ import annotations

import logging
from pathlib import Path

from resgen.models import (
    COLOR,
    STRING,
    ArrayValue,
    BoolValue,
    ColorValue,
    Reference,
    ResourceGraph,
    ResourceKey,
    ResourceKind,
    ResourceOrigin,
    StringValue,
    UrlValue,
)
from resgen.parsing.ast import ParsedResource
from resgen.references import ReferenceResolver
from resgen.types import ArrayType, BoolType, ColorType, EmitContext, StringType, UrlType

ORIGIN = ResourceOrigin(file=Path("values.xml"))


def _context(graph: ResourceGraph | None = None) -> EmitContext:
    return EmitContext(resolver=ReferenceResolver(graph or ResourceGraph()))


def test_string_handler_classifies_references() -> None:
    handler = StringType()

    plain = handler.build_node(ParsedResource(name="a", tag="string", value="Hello"), ORIGIN)
    reference = handler.build_node(ParsedResource(name="b", tag="string", value="@string/a"), ORIGIN)

    assert plain.kind == STRING
    assert plain.value == StringValue("Hello")
    assert isinstance(reference.value, Reference)


def test_color_handler_only_classifies_text_starting_with_at() -> None:
    handler = ColorType()

    literal = handler.build_node(ParsedResource(name="c", tag="color", value="#FF5722"), ORIGIN)
    alias = handler.build_node(ParsedResource(name="d", tag="color", value="@color/c"), ORIGIN)

    assert literal.kind == COLOR
    assert literal.value == ColorValue("#FF5722")
    assert isinstance(alias.value, Reference)


def test_url_handler_keeps_at_signs_inside_urls() -> None:
    node = UrlType().build_node(
        ParsedResource(name="profile", tag="url", value="https://example.com/@user/posts"), ORIGIN
    )

    assert node.value == UrlValue("https://example.com/@user/posts")


def test_text_handlers_ignore_foreign_tags_and_empty_values() -> None:
    assert StringType().build_node(ParsedResource(name="a", tag="color", value="x"), ORIGIN) is None
    assert StringType().build_node(ParsedResource(name="a", tag="string", value=""), ORIGIN) is None


def test_string_emission_resolves_references() -> None:
    handler = StringType()
    graph = ResourceGraph()
    graph.insert(ResourceKey.from_path("app_name"), handler.build_node(ParsedResource(name="app_name", tag="string", value="Acme"), ORIGIN))
    welcome = handler.build_node(ParsedResource(name="welcome", tag="string", value='Say "hi" to @string/app_name'), ORIGIN)

    code = handler.emit_code(ResourceKey.from_path("welcome"), welcome, 8, _context(graph))

    assert code == '        WELCOME: Final[str] = "Say \\"hi\\" to Acme"\n'


def test_bool_handler_emits_python_booleans() -> None:
    handler = BoolType()
    node = handler.build_node(ParsedResource(name="debug", tag="bool", value="false"), ORIGIN)

    assert node.value == BoolValue(False)
    assert handler.emit_code(ResourceKey.from_path("debug"), node, 0, _context()) == "DEBUG: Final[bool] = False\n"


def test_array_handler_converts_items() -> None:
    handler = ArrayType()
    node = handler.build_node(
        ParsedResource(name="sizes", tag="array", element="float", items=("1", "2.5", "-3e2")), ORIGIN
    )

    assert node.kind == ResourceKind.array("float")
    assert node.value == ArrayValue("float", (1.0, 2.5, -300.0))
    assert handler.handles(ResourceKind.array("color"))


def test_array_handler_emits_tuple_literals() -> None:
    handler = ArrayType()
    context = _context()
    labels = handler.build_node(
        ParsedResource(name="labels", tag="array", element="string", items=('Say "hi"', "Bye")), ORIGIN
    )
    single = handler.build_node(ParsedResource(name="flags", tag="array", element="bool", items=("true",)), ORIGIN)

    assert (
        handler.emit_code(ResourceKey.from_path("labels"), labels, 0, context)
        == 'LABELS: Final[Tuple[str, ...]] = ("Say \\"hi\\"", "Bye")\n'
    )
    assert handler.emit_code(ResourceKey.from_path("flags"), single, 0, context) == "FLAGS: Final[Tuple[bool, ...]] = (True,)\n"
    assert context.typing_names == {"Final", "Tuple"}


def test_array_with_invalid_item_is_dropped_with_warning(caplog) -> None:
    parsed = ParsedResource(name="ids", tag="array", element="int", items=("1", "two", "3"))

    with caplog.at_level(logging.WARNING, logger="resgen"):
        node = ArrayType().build_node(parsed, ORIGIN)

    assert node is None
    assert any("'two'" in record.getMessage() for record in caplog.records)
