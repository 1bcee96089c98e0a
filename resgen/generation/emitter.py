"""Recursive emission of the namespaced ``r`` class."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Tuple

from ..logging import get_logger
from ..models import ResourceGraph, ResourceKey
from ..types import EmitContext, TypeRegistry
from ..utils import constant_name, sanitize_identifier
from .tree import NamespaceNode

ROOT_CLASS = "r"
INDENT = 4

_LOGGER = get_logger("generation")


@dataclass(frozen=True)
class EmittedMember:
    """A class attribute written for a key, reachable as ``path``."""

    key: ResourceKey
    attribute: str
    path: str
    is_function: bool = False


class CodeEmitter:
    """Walks a namespace tree and asks each key's handler for its code.

    Every attribute of a generated class is claimed once. Keys claim names
    in key order, then child namespaces; a later claimant of a taken name
    (or of one of ``reserved``, the module names class bodies evaluate)
    gets a ``_2``, ``_3``... suffix and a warning.
    """

    def __init__(
        self,
        graph: ResourceGraph,
        registry: TypeRegistry,
        context: EmitContext,
        reserved: Iterable[str] = (),
    ) -> None:
        self.graph = graph
        self.registry = registry
        self.context = context
        self.reserved: FrozenSet[str] = frozenset(reserved)
        self.members: List[EmittedMember] = []

    def emit(self, tree: NamespaceNode) -> str:
        lines = [f"class {ROOT_CLASS}:\n"]
        lines.extend(self._emit_node(tree, INDENT, (ROOT_CLASS,), ()))
        return "".join(lines)

    def _emit_node(
        self, node: NamespaceNode, indent: int, path: Tuple[str, ...], namespace: Tuple[str, ...]
    ) -> List[str]:
        pad = " " * indent
        owners: Dict[str, str] = {name: f"generated name {name}" for name in self.reserved}
        blocks: List[str] = []
        for key in node.keys:
            block = self._emit_key(key, indent, path, owners)
            if block:
                blocks.append(block)
        for segment, child in node.children.items():
            child_namespace = (*namespace, segment)
            class_name = self._claim(
                sanitize_identifier(segment), f"namespace '{'/'.join(child_namespace)}'", owners, path
            )
            body = self._emit_node(child, indent + INDENT, (*path, class_name), child_namespace)
            blocks.append(f"{pad}class {class_name}:\n" + "".join(body))
        if not blocks:
            return [f"{pad}pass\n"]
        return _join_blocks(blocks)

    def _emit_key(self, key: ResourceKey, indent: int, path: Tuple[str, ...], owners: Dict[str, str]) -> str:
        node = self.graph.get(key)
        if node is None:
            return ""
        handler = self.registry.handler_for(node.kind)
        if handler is None:
            self.context.warn(f"No handler registered for {node.kind.label} resource '{key}'; skipped")
            return ""

        natural = handler.attribute_name(key, node)
        attribute = self._claim(natural, f"resource '{key}'", owners, path)
        if attribute != natural:
            self.context.attribute_names[key] = attribute
        code = handler.emit_code(key, node, indent, self.context)
        if not code:
            _LOGGER.debug("Handler %s emitted nothing for '%s'", handler.name, key)
            del owners[attribute]
            self.context.attribute_names.pop(key, None)
            return ""

        self.members.append(
            EmittedMember(
                key=key,
                attribute=attribute,
                path=".".join((*path, attribute)),
                is_function=natural != constant_name(key.name),
            )
        )
        if self.graph.has_duplicates(key):
            code = _deprecation_comment(self.graph, key, indent) + code
        return code

    def _claim(self, name: str, owner: str, owners: Dict[str, str], path: Tuple[str, ...]) -> str:
        chosen = name
        counter = 2
        while chosen in owners:
            chosen = f"{name}_{counter}"
            counter += 1
        if chosen != name:
            self.context.warn(
                f"{owner} and {owners[name]} both map to {'.'.join((*path, name))}; {owner} emitted as {chosen}"
            )
        owners[chosen] = owner
        return chosen


def _deprecation_comment(graph: ResourceGraph, key: ResourceKey, indent: int) -> str:
    nodes = graph.get_all(key)
    others = ", ".join(str(node.origin.file) for node in nodes[1:])
    return f"{' ' * indent}# deprecated: '{key}' is also defined in {others}; using {nodes[0].origin.file}\n"


def _join_blocks(blocks: List[str]) -> List[str]:
    joined: List[str] = []
    previous_multiline = False
    for block in blocks:
        multiline = block.count("\n") > 1
        if joined and (multiline or previous_multiline):
            joined.append("\n")
        joined.append(block)
        previous_multiline = multiline
    return joined


__all__ = ["CodeEmitter", "EmittedMember", "INDENT", "ROOT_CLASS"]
