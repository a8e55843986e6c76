"""Derived graph models.

A ``MapGraph`` is rebuilt wholesale from a snapshot of component descriptors
and is read-only once published.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from contract.tags import MapTag

EdgeKey = tuple[str, str]


class IssueKind(str, Enum):
    CYCLE = "cycle"
    MUTUAL_DEPENDENCY = "mutual_dependency"


@dataclass(frozen=True)
class Node:
    """One graph vertex per marked component."""

    type_id: str
    display_name: str
    tags: MapTag = MapTag.NONE
    comment: str | None = None
    exposed: tuple[str, ...] = ()


@dataclass(frozen=True)
class Edge:
    """A logical ``source -> target`` dependency."""

    source: str
    target: str
    uses: tuple[str, ...] = ()


@dataclass(frozen=True)
class Issue:
    """An architectural problem found by the detector.

    ``signature`` is the dedup key; ``path`` holds the involved type_ids
    (closed for cycles, an unordered pair for mutual dependencies).
    """

    kind: IssueKind
    title: str
    details: str
    signature: str
    path: tuple[str, ...] = ()


@dataclass(frozen=True)
class MapGraph:
    nodes: tuple[Node, ...] = ()
    edges: dict[str, tuple[str, ...]] = field(default_factory=dict)
    uses: dict[EdgeKey, tuple[str, ...]] = field(default_factory=dict)
    issues: tuple[Issue, ...] = ()
    cyclic_edges: frozenset[EdgeKey] = frozenset()

    def node(self, type_id: str) -> Node | None:
        for node in self.nodes:
            if node.type_id == type_id:
                return node
        return None

    def display_name(self, type_id: str) -> str:
        node = self.node(type_id)
        if node is None:
            return type_id.rsplit(".", 1)[-1]
        return node.display_name

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.edges.get(source, ())

    def outgoing(self, type_id: str) -> tuple[str, ...]:
        return self.edges.get(type_id, ())

    def incoming(self, type_id: str) -> tuple[str, ...]:
        return tuple(
            source for source, targets in self.edges.items() if type_id in targets
        )

    def edge_list(self) -> list[Edge]:
        return [
            Edge(source, target, self.uses.get((source, target), ()))
            for source, targets in self.edges.items()
            for target in targets
        ]

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.edges.values())


__all__ = ["Edge", "EdgeKey", "Issue", "IssueKind", "MapGraph", "Node"]
