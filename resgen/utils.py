"""Identifier helpers shared by the type handlers and the generator."""

from __future__ import annotations

import keyword
import re

_INVALID_CHARS = re.compile(r"\W")


def sanitize_identifier(value: str) -> str:
    """Return ``value`` as a valid Python identifier.

    Characters outside ``[A-Za-z0-9_]`` (and other unicode word characters)
    become underscores; a leading digit gets an underscore prefix and
    keywords get an underscore suffix.
    """
    cleaned = _INVALID_CHARS.sub("_", value)
    if not cleaned:
        return "_"
    if cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    if keyword.iskeyword(cleaned) or keyword.issoftkeyword(cleaned):
        cleaned = f"{cleaned}_"
    return cleaned


def constant_name(value: str) -> str:
    """Upper-case identifier used for generated constants."""
    return sanitize_identifier(value.upper())


def function_name(value: str) -> str:
    """Lower-case identifier used for generated template functions."""
    return sanitize_identifier(value.lower())


def python_string(value: str) -> str:
    """Render ``value`` as a double-quoted Python string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


__all__ = ["constant_name", "function_name", "python_string", "sanitize_identifier"]
