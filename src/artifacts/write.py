from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.markdown import render_markdown
from artifacts.report import assemble_report
from artifacts.utils import _write_json
from contract.artifacts import MAP_MARKDOWN, REPORT_JSON
from graph.builder import build_graph
from rules.config import load_config, resolve_output_dir
from scan.components import collect_components

if TYPE_CHECKING:
    from pathlib import Path

    from contract.models import MapGraph
    from rules.config import SystemMapConfig


def build_root_graph(root: Path, config: SystemMapConfig) -> MapGraph:
    """Describe every component under ``root`` and build its graph."""
    return build_graph(collect_components(root, config), config.inclusion)


def write_artifacts(
    graph: MapGraph, out_dir: Path, config: SystemMapConfig
) -> list[Path]:
    """Write report.json and map.md for ``graph`` into ``out_dir``."""
    out_dir.mkdir(parents=True, exist_ok=True)

    report_path = out_dir / REPORT_JSON
    _write_json(report_path, assemble_report(graph))

    map_path = out_dir / MAP_MARKDOWN
    map_path.write_text(
        render_markdown(
            graph,
            reverse=config.view.reverse,
            tag_filter=config.view.tag_filter,
        ),
        encoding="utf-8",
    )

    return [report_path, map_path]


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: SystemMapConfig | None = None,
) -> dict[str, object]:
    """Build the system map for a source root and write its artifacts.

    Args:
        root: Root directory whose modules declare the components
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from the root when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    graph = build_root_graph(root, config)
    paths = write_artifacts(graph, out_dir, config)

    return {
        "node_count": len(graph.nodes),
        "edge_count": graph.edge_count,
        "issue_count": len(graph.issues),
        "artifacts": [str(path) for path in paths],
    }
