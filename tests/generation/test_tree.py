"""Tests for namespace tree construction."""

from __future__ import annotations

from pathlib import Path

from resgen.generation import build_namespace_tree
from resgen.models import STRING, ResourceGraph, ResourceKey, ResourceNode, ResourceOrigin, StringValue


def _graph(*paths: str) -> ResourceGraph:
    graph = ResourceGraph()
    for path in paths:
        node = ResourceNode(kind=STRING, value=StringValue(path), origin=ResourceOrigin(file=Path("a.xml")))
        graph.insert(ResourceKey.from_path(path), node)
    return graph


def test_tree_groups_keys_by_namespace_in_sorted_order() -> None:
    tree = build_namespace_tree(_graph("zeta", "settings/theme", "auth/title", "alpha", "auth/errors/invalid", "auth/body"))

    assert [key.name for key in tree.keys] == ["alpha", "zeta"]
    assert list(tree.children) == ["auth", "settings"]
    auth = tree.children["auth"]
    assert [key.name for key in auth.keys] == ["body", "title"]
    assert list(auth.children) == ["errors"]
    assert auth.children["errors"].keys == [ResourceKey(("auth", "errors"), "invalid")]


def test_tree_of_empty_graph_is_empty() -> None:
    tree = build_namespace_tree(ResourceGraph())

    assert tree.children == {}
    assert tree.keys == []
