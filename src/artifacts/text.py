"""Plain-text tree and problem listings for terminals."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.tags import MapTag, format_tags
from graph.query import iter_tree, roots

if TYPE_CHECKING:
    from contract.models import MapGraph

CYCLE_MARKER = "[cycle]"
NO_ISSUES = "No issues detected."


def render_tree(
    graph: MapGraph,
    *,
    reverse: bool = False,
    tag_filter: MapTag = MapTag.NONE,
) -> str:
    """Dependency tree with each node expanded once per root.

    A node reached again under the same root shows only as its parent's
    ``Uses:`` line. Edges lying on a cycle are flagged.
    """
    prefix = "Used by: " if reverse else "Uses: "
    lines: list[str] = []

    for entry in iter_tree(
        graph,
        roots(graph, reverse, tag_filter),
        reverse=reverse,
        shared_visited=True,
    ):
        indent = "  " * (entry.depth * 2)
        node = entry.node
        lines.append(f"{indent}{node.type_id}  [{format_tags(node.tags)}]")
        if node.comment:
            lines.append(f"{indent}  # {node.comment}")
        if node.exposed:
            lines.append(f"{indent}  Exposes: {', '.join(node.exposed)}")
        for link in entry.links:
            line = f"{indent}  {prefix}{link.node.type_id}"
            if link.uses:
                line += f" (uses: {', '.join(link.uses)})"
            if link.cyclic:
                line += f" {CYCLE_MARKER}"
            lines.append(line)

    return "\n".join(lines)


def render_problems(graph: MapGraph) -> str:
    if not graph.issues:
        return NO_ISSUES
    blocks = [f"{issue.title}\n  {issue.details}" for issue in graph.issues]
    return "\n\n".join(blocks)


__all__ = ["CYCLE_MARKER", "NO_ISSUES", "render_problems", "render_tree"]
