"""Tests for profile preprocessing."""

from __future__ import annotations

from lxml import etree

from resgen.profile import preprocess_xml

SOURCE = """<resources>
    <string name="shared">Both</string>
    <string name="api_url" profile="release">https://api.example.com</string>
    <string name="api_url" profile="debug">http://localhost:8080</string>
    <ns name="debug_tools" profile="debug">
        <bool name="enabled">true</bool>
    </ns>
</resources>"""


def _names(xml: str) -> list:
    root = etree.fromstring(xml.encode("utf-8"))
    return [(element.tag, element.get("name"), (element.text or "").strip()) for element in root.iter() if element.get("name")]


def test_release_profile_keeps_release_elements_only() -> None:
    names = _names(preprocess_xml(SOURCE, "release"))

    assert ("string", "shared", "Both") in names
    assert ("string", "api_url", "https://api.example.com") in names
    assert ("string", "api_url", "http://localhost:8080") not in names
    assert all(name != "debug_tools" for _, name, _ in names)
    assert all(name != "enabled" for _, name, _ in names)


def test_debug_profile_keeps_debug_elements_and_subtrees() -> None:
    names = _names(preprocess_xml(SOURCE, "debug"))

    assert ("string", "shared", "Both") in names
    assert ("string", "api_url", "http://localhost:8080") in names
    assert ("string", "api_url", "https://api.example.com") not in names
    assert ("bool", "enabled", "true") in names


def test_kept_elements_keep_their_attributes() -> None:
    output = preprocess_xml(SOURCE, "debug")

    root = etree.fromstring(output.encode("utf-8"))
    kept = [element for element in root.iter("string") if element.get("name") == "api_url"]
    assert len(kept) == 1
    assert kept[0].get("profile") == "debug"


def test_text_after_dropped_element_is_preserved() -> None:
    source = '<template name="t">Hello <string name="x" profile="release"/>world</template>'

    output = preprocess_xml(source, "debug")

    root = etree.fromstring(output.encode("utf-8"))
    assert len(root) == 0
    assert root.text == "Hello world"


def test_malformed_input_is_returned_unchanged() -> None:
    source = "<resources><string name='a'>oops</resources>"

    assert preprocess_xml(source, "debug") == source


def test_excluded_root_yields_an_empty_document() -> None:
    output = preprocess_xml('<resources profile="release"><string name="a">x</string></resources>', "debug")

    root = etree.fromstring(output.encode("utf-8"))
    assert len(root) == 0
