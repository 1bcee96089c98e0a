"""Tests for text classification into references and interpolations."""

from __future__ import annotations

from resgen.models import InterpolatedString, Reference, ResourceKey, StringValue, TextPart
from resgen.values import classify_text, parse_reference


def test_whole_reference_is_a_pure_reference() -> None:
    value = classify_text("@string/app_name")

    assert value == Reference(resource_type="string", key=ResourceKey.from_path("app_name"))


def test_embedded_reference_becomes_three_part_interpolation() -> None:
    value = classify_text("Welcome @string/app_name!")

    assert isinstance(value, InterpolatedString)
    assert value.parts == (
        TextPart("Welcome "),
        Reference("string", ResourceKey.from_path("app_name")),
        TextPart("!"),
    )


def test_reference_keys_may_traverse_namespaces() -> None:
    value = classify_text("@string/auth/errors/invalid")

    assert isinstance(value, Reference)
    assert value.key == ResourceKey(namespace=("auth", "errors"), name="invalid")


def test_trailing_slash_is_not_part_of_the_key() -> None:
    value = classify_text("see @url/docs/ for more")

    assert isinstance(value, InterpolatedString)
    assert value.parts[1] == Reference("url", ResourceKey.from_path("docs"))
    assert value.parts[2] == TextPart("/ for more")


def test_malformed_at_signs_stay_literal() -> None:
    assert classify_text("mail me @ home") == StringValue("mail me @ home")
    assert classify_text("user@example") == StringValue("user@example")
    assert classify_text("@string") == StringValue("@string")


def test_literal_at_signs_merge_into_surrounding_text() -> None:
    value = classify_text("a @ b @string/x")

    assert isinstance(value, InterpolatedString)
    assert value.parts == (TextPart("a @ b "), Reference("string", ResourceKey.from_path("x")))


def test_parse_reference_requires_the_whole_text() -> None:
    assert parse_reference("@color/primary") == Reference("color", ResourceKey.from_path("primary"))
    assert parse_reference("@color/primary extra") is None
    assert parse_reference("x@color/primary") is None
    assert parse_reference("@a/b@c/d") is None
