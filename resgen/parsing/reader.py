"""Streaming XML reader turning raw files into parsed declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence

from lxml import etree

from ..logging import get_logger
from ..models import TemplateParam
from .ast import ParsedResource, ParsedResourceFile

_LOGGER = get_logger("parsing")

NUMBER_TAGS = frozenset({"number", "int", "float"})
PARAM_TAGS = frozenset({"string", "number", "int", "float", "bool", "color", "param"})
_ARRAY_SUFFIX = "-array"
_IGNORED_TAGS = frozenset({"resources", "item"})
LEAF_TAGS = frozenset({"string", "number", "int", "float", "bool", "color", "url", "dimension"})


class ParserError(ValueError):
    """Malformed XML in a single resource file."""

    def __init__(self, path: Path, line: int, column: int, message: str) -> None:
        super().__init__(f"{path}:{line}:{column}: {message}")
        self.path = path
        self.line = line
        self.column = column
        self.message = message


class ParseFailure(RuntimeError):
    """Raised after a batch parse when one or more files were malformed."""

    def __init__(self, errors: Sequence[ParserError]) -> None:
        self.errors: List[ParserError] = list(errors)
        details = "\n".join(f"  {error}" for error in self.errors)
        super().__init__(f"Failed to parse {len(self.errors)} resource file(s):\n{details}")


@dataclass
class _TemplateState:
    name: str
    line: Optional[int]
    element: etree._Element
    text: Optional[str] = None
    params: List[TemplateParam] = field(default_factory=list)


@dataclass
class _ArrayState:
    name: str
    element_kind: str
    line: Optional[int]
    items: List[str] = field(default_factory=list)


class _ResourceHandler:
    """Receives start/end events and tracks namespace, template and array state."""

    def __init__(self) -> None:
        self.resources: List[ParsedResource] = []
        self._namespaces: List[Optional[str]] = []
        self._template: Optional[_TemplateState] = None
        self._array: Optional[_ArrayState] = None

    def start(self, element: etree._Element) -> None:
        tag = _local_name(element)
        if tag == "ns":
            self._namespaces.append(element.get("name"))
            return

        if self._template is not None:
            if tag in PARAM_TAGS:
                self._template.params.append(_template_param(tag, element))
            return
        if self._array is not None:
            return

        name = element.get("name")
        if name is None:
            return
        if tag == "template":
            self._template = _TemplateState(self._qualify(name), element.sourceline, element)
        elif tag == "string" and element.get("template") is not None:
            self._template = _TemplateState(
                self._qualify(name), element.sourceline, element, text=element.get("template")
            )
        elif tag.endswith(_ARRAY_SUFFIX):
            self._array = _ArrayState(self._qualify(name), tag[: -len(_ARRAY_SUFFIX)], element.sourceline)

    def end(self, element: etree._Element) -> None:
        tag = _local_name(element)
        if tag == "ns":
            if self._namespaces:
                self._namespaces.pop()
            return

        template = self._template
        if template is not None:
            if element is template.element:
                self._finish_template(template)
            return

        array = self._array
        if array is not None:
            if tag == "item":
                array.items.append(_element_text(element))
            elif tag == f"{array.element_kind}{_ARRAY_SUFFIX}":
                self.resources.append(
                    ParsedResource(
                        name=array.name,
                        tag="array",
                        element=array.element_kind,
                        items=tuple(array.items),
                        line=array.line,
                    )
                )
                self._array = None
            return

        name = element.get("name")
        if name is None or tag in _IGNORED_TAGS:
            return
        resource = self._leaf(tag, self._qualify(name), element)
        if resource is not None:
            self.resources.append(resource)

    def _leaf(self, tag: str, name: str, element: etree._Element) -> Optional[ParsedResource]:
        if tag not in LEAF_TAGS and len(element):
            return None
        text = _element_text(element)
        if not text:
            return None
        if tag == "bool":
            if text not in {"true", "false"}:
                _LOGGER.debug("Dropping bool '%s' with unparsable value '%s'", name, text)
                return None
            return ParsedResource(name=name, tag=tag, value=text, line=element.sourceline)
        if tag in NUMBER_TAGS:
            return ParsedResource(
                name=name,
                tag=tag,
                value=text,
                explicit_type=element.get("type"),
                line=element.sourceline,
            )
        return ParsedResource(name=name, tag=tag, value=text, line=element.sourceline)

    def _finish_template(self, template: _TemplateState) -> None:
        element = template.element
        text = template.text
        if text is None:
            chunks = [element.text] + [child.tail for child in element]
            text = " ".join(chunk.strip() for chunk in chunks if chunk and chunk.strip())
        self.resources.append(
            ParsedResource(
                name=template.name,
                tag="template",
                value=text,
                params=tuple(template.params),
                line=template.line,
            )
        )
        self._template = None

    def _qualify(self, name: str) -> str:
        prefix = [segment for segment in self._namespaces if segment]
        return "/".join((*prefix, name))


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _element_text(element: etree._Element) -> str:
    return str(element.xpath("string()")).strip()


def _template_param(tag: str, element: etree._Element) -> TemplateParam:
    name = element.get("name", "")
    if tag == "param":
        param_type = (element.get("type") or "string").strip().lower()
        return TemplateParam(name=name, param_type=param_type)
    explicit = element.get("type") if tag in NUMBER_TAGS else None
    return TemplateParam(name=name, param_type=tag, explicit_type=explicit)


def parse_contents(path: Path, contents: str, is_test: bool = False) -> ParsedResourceFile:
    """Parse one file's XML text; raise :class:`ParserError` when malformed."""
    handler = _ResourceHandler()
    source = BytesIO(contents.encode("utf-8"))
    try:
        for event, element in etree.iterparse(
            source,
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
        ):
            if event == "start":
                handler.start(element)
            else:
                handler.end(element)
    except etree.XMLSyntaxError as exc:
        line, column = exc.position if exc.position else (0, 0)
        raise ParserError(path, line, column, exc.msg or str(exc)) from exc

    _LOGGER.debug("Parsed %d declaration(s) from %s", len(handler.resources), path)
    return ParsedResourceFile(path=path, is_test=is_test, resources=handler.resources)


__all__ = ["NUMBER_TAGS", "PARAM_TAGS", "ParseFailure", "ParserError", "parse_contents"]
