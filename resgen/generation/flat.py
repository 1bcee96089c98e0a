"""Module-level aliases re-exporting the namespaced members.

A leaf name unique across the graph keeps its bare name. Leaves sharing a
name get the shortest namespace suffix that tells them apart
(``auth_title``, ``app_auth_title``...), assigned in key order. The fully
qualified path is the fallback, then a numeric suffix.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Set

from ..utils import sanitize_identifier
from .emitter import EmittedMember


@dataclass(frozen=True)
class FlatAlias:
    alias: str
    target: str


def _styled(member: EmittedMember, segments: Sequence[str]) -> str:
    text = "_".join(sanitize_identifier(segment) for segment in segments)
    return sanitize_identifier(text.lower() if member.is_function else text.upper())


def _suffix_segments(member: EmittedMember, depth: int) -> List[str]:
    namespace = list(member.key.namespace)
    return [*namespace[len(namespace) - depth :], member.key.name] if depth else [member.key.name]


def build_flat_aliases(members: Iterable[EmittedMember], reserved: Iterable[str] = ()) -> List[FlatAlias]:
    """Assign one alias per member, never reusing a name in ``reserved``."""
    ordered = sorted(members, key=lambda member: member.key)
    used: Set[str] = set(reserved)
    groups: Dict[str, List[EmittedMember]] = defaultdict(list)
    for member in ordered:
        groups[member.attribute].append(member)

    aliases: List[FlatAlias] = []
    for member in ordered:
        group = groups[member.attribute]
        alias = _choose_alias(member, group, used)
        used.add(alias)
        aliases.append(FlatAlias(alias=alias, target=member.path))
    return aliases


def _choose_alias(member: EmittedMember, group: Sequence[EmittedMember], used: Set[str]) -> str:
    if len(group) == 1 and member.attribute not in used:
        return member.attribute

    others = [other for other in group if other is not member]
    for depth in range(1, len(member.key.namespace) + 1):
        suffix = member.key.namespace[-depth:]
        if any(other.key.namespace[-depth:] == suffix for other in others):
            continue
        candidate = _styled(member, _suffix_segments(member, depth))
        if candidate not in used:
            return candidate

    candidate = _styled(member, member.key.segments)
    counter = 2
    base = candidate
    while candidate in used:
        candidate = f"{base}_{counter}"
        counter += 1
    return candidate


__all__ = ["FlatAlias", "build_flat_aliases"]
