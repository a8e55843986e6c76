"""Assemble the sorted, serialisable report for a graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.report import DependencyRecord, IssueRecord, MapReport, NodeRecord
from contract.tags import tag_names
from graph.query import consumers, neighbors

if TYPE_CHECKING:
    from contract.models import MapGraph


def assemble_report(graph: MapGraph) -> MapReport:
    """Build the report: nodes by type_id with consumers, issues as detected."""
    records: list[NodeRecord] = []
    for node in sorted(graph.nodes, key=lambda n: n.type_id):
        records.append(
            NodeRecord(
                type_id=node.type_id,
                display_name=node.display_name,
                tags=tag_names(node.tags),
                comment=node.comment,
                exposed=sorted(node.exposed),
                dependencies=[
                    DependencyRecord(
                        target=link.node.type_id,
                        uses=list(link.uses),
                        cyclic=link.cyclic,
                    )
                    for link in neighbors(graph, node.type_id)
                ],
                consumers=[
                    consumer.display_name
                    for consumer in consumers(graph, node.type_id)
                ],
            )
        )

    issues = [
        IssueRecord(
            kind=issue.kind.value,
            title=issue.title,
            details=issue.details,
            path=list(issue.path),
        )
        for issue in graph.issues
    ]

    return MapReport(
        node_count=len(graph.nodes),
        edge_count=graph.edge_count,
        nodes=records,
        issues=issues,
    )


__all__ = ["assemble_report"]
