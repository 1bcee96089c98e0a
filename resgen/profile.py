"""Profile-gated preprocessing of resource XML."""

from __future__ import annotations

from typing import List

from lxml import etree

from .logging import get_logger

PROFILE_ATTRIBUTE = "profile"

_LOGGER = get_logger("profile")


def preprocess_xml(xml: str, profile: str) -> str:
    """Drop every element whose ``profile`` attribute differs from ``profile``.

    Elements without the attribute are kept. The subtree of a dropped element
    goes with it while the text that followed it stays in place. Input that is
    not well-formed is returned unchanged so the parser can report the error
    with its position.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml.encode("utf-8"), parser)
    except etree.XMLSyntaxError:
        return xml

    if _is_excluded(root, profile):
        _LOGGER.debug("Root element excluded for profile '%s'", profile)
        root.clear()
        return etree.tostring(root, encoding="unicode")

    excluded: List[etree._Element] = [
        element for element in root.iterdescendants() if _is_excluded(element, profile)
    ]
    for element in excluded:
        _remove_keeping_tail(element)
    if excluded:
        _LOGGER.debug("Dropped %d element(s) for profile '%s'", len(excluded), profile)

    return etree.tostring(root, encoding="unicode")


def _is_excluded(element: etree._Element, profile: str) -> bool:
    if not isinstance(element.tag, str):
        return False
    value = element.get(PROFILE_ATTRIBUTE)
    return value is not None and value != profile


def _remove_keeping_tail(element: etree._Element) -> None:
    parent = element.getparent()
    if parent is None:
        return
    tail = element.tail
    if tail:
        previous = element.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + tail
        else:
            parent.text = (parent.text or "") + tail
    parent.remove(element)


__all__ = ["PROFILE_ATTRIBUTE", "preprocess_xml"]
