"""Graph construction from a snapshot of component descriptors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.models import EdgeKey, MapGraph, Node
from graph.algos import detect_issues
from rules.config import InclusionConfig
from rules.inclusion import resolve_marker

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from contract.descriptors import ComponentDescriptor

logger = logging.getLogger(__name__)


def _usable(
    descriptors: Iterable[ComponentDescriptor | None],
) -> list[ComponentDescriptor]:
    """Drop missing entries and repeated identities, keeping first occurrences."""
    snapshot: list[ComponentDescriptor] = []
    seen: set[str] = set()
    for descriptor in descriptors:
        if descriptor is None:
            logger.warning("Skipping unavailable component declaration")
            continue
        if descriptor.type_id in seen:
            logger.warning("Skipping duplicate component %s", descriptor.type_id)
            continue
        seen.add(descriptor.type_id)
        snapshot.append(descriptor)
    return snapshot


def extract_nodes(
    descriptors: Iterable[ComponentDescriptor | None],
    policy: InclusionConfig | None = None,
) -> list[Node]:
    """Build one node per component admitted by the inclusion policy.

    Exposed members are reported by alias when one is given, deduplicated in
    discovery order.
    """
    if policy is None:
        policy = InclusionConfig()

    nodes: list[Node] = []
    for descriptor in _usable(descriptors):
        marker = resolve_marker(descriptor, policy)
        if marker is None:
            continue
        exposed = dict.fromkeys(member.reported_name for member in descriptor.exposed)
        nodes.append(
            Node(
                type_id=descriptor.type_id,
                display_name=marker.display_name,
                tags=marker.tags,
                comment=descriptor.comment,
                exposed=tuple(exposed),
            )
        )
    return nodes


def _declared_uses(descriptor: ComponentDescriptor) -> dict[str, tuple[str, ...]]:
    """Merge declared dependencies per target, keeping non-blank uses once."""
    merged: dict[str, dict[str, None]] = {}
    for dependency in descriptor.dependencies:
        uses = merged.setdefault(dependency.target, {})
        for use in dependency.uses:
            name = use.strip()
            if name:
                uses.setdefault(name)
    return {target: tuple(uses) for target, uses in merged.items()}


def _depends_structurally(descriptor: ComponentDescriptor, target: str) -> bool:
    return any(member.refers_to(target) for member in descriptor.members)


def discover_edges(
    nodes: Sequence[Node],
    components: Mapping[str, ComponentDescriptor],
) -> tuple[dict[str, tuple[str, ...]], dict[EdgeKey, tuple[str, ...]]]:
    """Decide, for every ordered pair of nodes, whether the first uses the second.

    An edge exists when the consumer declares a dependency on the target or
    when one of its own members is typed as the target (or a subtype of it).
    Only declared dependencies contribute uses. Targets that are not nodes
    are ignored, and a node never depends on itself.

    Returns:
        Ordered adjacency (targets in node order) and uses per edge
    """
    edges: dict[str, tuple[str, ...]] = {}
    uses_by_edge: dict[EdgeKey, tuple[str, ...]] = {}

    for consumer in nodes:
        descriptor = components.get(consumer.type_id)
        if descriptor is None:
            continue
        declared = _declared_uses(descriptor)

        targets: list[str] = []
        for target in nodes:
            if target.type_id == consumer.type_id:
                continue
            if target.type_id in declared or _depends_structurally(
                descriptor, target.type_id
            ):
                targets.append(target.type_id)
                uses_by_edge[(consumer.type_id, target.type_id)] = declared.get(
                    target.type_id, ()
                )

        if targets:
            edges[consumer.type_id] = tuple(targets)

    return edges, uses_by_edge


def build_graph(
    descriptors: Iterable[ComponentDescriptor | None],
    policy: InclusionConfig | None = None,
) -> MapGraph:
    """Build a complete graph from a snapshot of component descriptors.

    Everything is computed into local structures; the returned graph is new
    and never shares state with a previous build.
    """
    snapshot = _usable(descriptors)
    nodes = extract_nodes(snapshot, policy)
    components = {descriptor.type_id: descriptor for descriptor in snapshot}
    edges, uses_by_edge = discover_edges(nodes, components)
    issues, cyclic_edges = detect_issues(nodes, edges)

    graph = MapGraph(
        nodes=tuple(nodes),
        edges=edges,
        uses=uses_by_edge,
        issues=tuple(issues),
        cyclic_edges=frozenset(cyclic_edges),
    )
    logger.info(
        "Built system map: %d nodes, %d edges, %d issues",
        len(graph.nodes),
        graph.edge_count,
        len(graph.issues),
    )
    return graph


__all__ = ["build_graph", "discover_edges", "extract_nodes"]
