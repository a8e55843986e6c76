"""Command-line interface for systemmap."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.markdown import render_markdown
from artifacts.text import render_problems, render_tree
from artifacts.write import build_root_graph, generate_all_artifacts
from contract.tags import MapTag, parse_tags
from contract.validation import validate_artifacts
from rules.config import ConfigError, SystemMapConfig, load_config
from verify.verify import verify_determinism


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Source root (default: .)",
    )


def _add_view_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--reverse",
        action="store_true",
        default=None,
        help="Start from components that depend on nothing",
    )
    parser.add_argument(
        "--tag",
        action="append",
        default=None,
        help="Only start from nodes carrying this tag (repeatable)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="systemmap")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", help="Write report.json and map.md"
    )
    _add_common_paths(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    tree_parser = subparsers.add_parser("tree", help="Print the dependency tree")
    _add_common_paths(tree_parser)
    _add_view_options(tree_parser)

    problems_parser = subparsers.add_parser(
        "problems", help="List cycles and mutual dependencies"
    )
    _add_common_paths(problems_parser)

    export_parser = subparsers.add_parser("export", help="Export the map as markdown")
    _add_common_paths(export_parser)
    _add_view_options(export_parser)
    export_parser.add_argument(
        "--output",
        default=None,
        help="Markdown file to write (default: stdout)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _view_settings(
    config: SystemMapConfig, reverse: bool | None, tags: list[str] | None
) -> tuple[bool, MapTag]:
    resolved_reverse = config.view.reverse if reverse is None else reverse
    tag_filter = config.view.tag_filter if tags is None else parse_tags(tags)
    return resolved_reverse, tag_filter


def _handle_generate(root: Path, out_dir: str | None) -> int:
    generate_all_artifacts(root=root, out_dir=_resolve_output_dir(out_dir))
    return 0


def _handle_tree(root: Path, reverse: bool | None, tags: list[str] | None) -> int:
    config = load_config(root)
    resolved_reverse, tag_filter = _view_settings(config, reverse, tags)
    graph = build_root_graph(root, config)
    sys.stdout.write(
        render_tree(graph, reverse=resolved_reverse, tag_filter=tag_filter) + "\n"
    )
    return 0


def _handle_problems(root: Path) -> int:
    graph = build_root_graph(root, load_config(root))
    sys.stdout.write(render_problems(graph) + "\n")
    return 1 if graph.issues else 0


def _handle_export(
    root: Path, reverse: bool | None, tags: list[str] | None, output: str | None
) -> int:
    config = load_config(root)
    resolved_reverse, tag_filter = _view_settings(config, reverse, tags)
    graph = build_root_graph(root, config)
    text = render_markdown(graph, reverse=resolved_reverse, tag_filter=tag_filter)
    if output is None:
        sys.stdout.write(text)
        return 0
    output_path = Path(output).expanduser().resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _dispatch(args: argparse.Namespace, root: Path) -> int:
    if args.command == "generate":
        return _handle_generate(root, args.out_dir)

    if args.command == "tree":
        return _handle_tree(root, args.reverse, args.tag)

    if args.command == "problems":
        return _handle_problems(root)

    if args.command == "export":
        return _handle_export(root, args.reverse, args.tag, args.output)

    if args.command == "validate":
        return _handle_validate(root, args.artifacts_dir)

    if args.command == "verify":
        return _handle_verify(root, args.artifacts_dir)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()

    try:
        return _dispatch(args, root)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2
    except ValueError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
