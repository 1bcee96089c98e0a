"""Namespace tree built from graph keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..models import ResourceGraph, ResourceKey


@dataclass
class NamespaceNode:
    """One namespace level: child namespaces and the keys ending here."""

    children: Dict[str, "NamespaceNode"] = field(default_factory=dict)
    keys: List[ResourceKey] = field(default_factory=list)

    def child(self, segment: str) -> "NamespaceNode":
        node = self.children.get(segment)
        if node is None:
            node = NamespaceNode()
            self.children[segment] = node
        return node

    def sort(self) -> None:
        self.children = {name: self.children[name] for name in sorted(self.children)}
        self.keys.sort(key=lambda key: key.name)
        for child in self.children.values():
            child.sort()


def build_namespace_tree(graph: ResourceGraph) -> NamespaceNode:
    root = NamespaceNode()
    for key in graph.keys():
        node = root
        for segment in key.namespace:
            node = node.child(segment)
        node.keys.append(key)
    root.sort()
    return root


__all__ = ["NamespaceNode", "build_namespace_tree"]
