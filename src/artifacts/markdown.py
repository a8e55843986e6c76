"""Markdown export of the dependency tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.tags import MapTag, format_tags
from graph.query import iter_tree, roots

if TYPE_CHECKING:
    from contract.models import MapGraph
    from graph.query import Link

MARKDOWN_TITLE = "# System Map"


def _uses_suffix(link: Link) -> str:
    if not link.uses:
        return ""
    return f" (uses: {', '.join(link.uses)})"


def render_markdown(
    graph: MapGraph,
    *,
    reverse: bool = False,
    tag_filter: MapTag = MapTag.NONE,
) -> str:
    """Render one bullet tree per root.

    Each node is printed once per root tree; its children follow its own
    ``-> Uses`` lines, indented four spaces deeper.
    """
    arrow = "<- Used by" if reverse else "-> Uses"
    lines = [MARKDOWN_TITLE, ""]

    for root in roots(graph, reverse, tag_filter):
        for entry in iter_tree(graph, [root], reverse=reverse, shared_visited=True):
            indent = " " * (entry.depth * 4)
            node = entry.node
            lines.append(f"{indent}- **{node.type_id} [{format_tags(node.tags)}]**")
            if node.comment:
                lines.append(f"{indent}  - _{node.comment}_")
            if node.exposed:
                lines.append(f"{indent}  Exposes: {', '.join(node.exposed)}")
            for link in entry.links:
                lines.append(
                    f"{indent}  {arrow} {link.node.type_id}{_uses_suffix(link)}"
                )
        lines.append("")

    return "\n".join(lines) + "\n"


__all__ = ["MARKDOWN_TITLE", "render_markdown"]
