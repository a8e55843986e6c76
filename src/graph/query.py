"""Read-only queries over a built graph: roots, neighbours and tree walks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from contract.tags import MapTag, matches_filter

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from contract.models import MapGraph, Node


@dataclass(frozen=True)
class Link:
    """A neighbour of a node together with the uses of the connecting edge."""

    node: Node
    uses: tuple[str, ...] = ()
    cyclic: bool = False


@dataclass(frozen=True)
class TreeEntry:
    depth: int
    node: Node
    links: tuple[Link, ...]


def roots(
    graph: MapGraph,
    reverse: bool = False,
    tag_filter: MapTag = MapTag.NONE,
) -> list[Node]:
    """Return tree entry points sorted by type_id.

    Without ``reverse`` these are nodes nothing depends on; with it, nodes
    that depend on nothing. When no root passes the tag filter, every node
    that passes it is returned instead.
    """
    if reverse:
        candidates = [node for node in graph.nodes if not graph.outgoing(node.type_id)]
    else:
        depended_on = {target for targets in graph.edges.values() for target in targets}
        candidates = [node for node in graph.nodes if node.type_id not in depended_on]

    found = sorted(
        (node for node in candidates if matches_filter(node.tags, tag_filter)),
        key=lambda node: node.type_id,
    )
    if found:
        return found

    return sorted(
        (node for node in graph.nodes if matches_filter(node.tags, tag_filter)),
        key=lambda node: node.type_id,
    )


def neighbors(graph: MapGraph, type_id: str, reverse: bool = False) -> list[Link]:
    """Outgoing links (or incoming ones with ``reverse``), sorted by type_id."""
    if reverse:
        keys = [(source, type_id) for source in graph.incoming(type_id)]
        others = [source for source, _ in keys]
    else:
        keys = [(type_id, target) for target in graph.outgoing(type_id)]
        others = [target for _, target in keys]

    links: list[Link] = []
    for other, key in zip(others, keys):
        node = graph.node(other)
        if node is None:
            continue
        links.append(
            Link(
                node=node,
                uses=graph.uses.get(key, ()),
                cyclic=key in graph.cyclic_edges,
            )
        )

    links.sort(key=lambda link: link.node.type_id)
    return links


def consumers(graph: MapGraph, type_id: str) -> list[Node]:
    """Nodes depending on ``type_id``, sorted by display name."""
    found = [
        node
        for node in (graph.node(source) for source in graph.incoming(type_id))
        if node is not None
    ]
    return sorted(found, key=lambda node: (node.display_name, node.type_id))


def _walk(
    graph: MapGraph,
    node: Node,
    depth: int,
    reverse: bool,
    visited: set[str],
    shared_visited: bool,
) -> Iterator[TreeEntry]:
    if node.type_id in visited:
        return
    visited.add(node.type_id)

    links = tuple(neighbors(graph, node.type_id, reverse))
    yield TreeEntry(depth=depth, node=node, links=links)

    for link in links:
        branch = visited if shared_visited else set(visited)
        yield from _walk(graph, link.node, depth + 1, reverse, branch, shared_visited)


def iter_tree(
    graph: MapGraph,
    start: Iterable[Node],
    *,
    reverse: bool = False,
    shared_visited: bool = True,
) -> Iterator[TreeEntry]:
    """Depth-first walk from each start node.

    With ``shared_visited`` (the default) a node is entered at most once per
    start node, so the walk from one start node yields at most one entry per
    graph node.
    Without it every path is expanded and only nodes already on the current
    path are skipped; on dense graphs that grows exponentially.
    """
    for node in start:
        yield from _walk(graph, node, 0, reverse, set(), shared_visited)


__all__ = ["Link", "TreeEntry", "consumers", "iter_tree", "neighbors", "roots"]
