"""Shared utilities for systemmap."""

from __future__ import annotations

from pathlib import Path


def path_to_module(file_path: str | Path) -> str:
    """Convert a file path relative to the scanned root to a module name.

    Args:
        file_path: Relative file path (e.g., "src/game/combat.py" or Path object)

    Returns:
        Module name (e.g., "game.combat")

    Raises:
        ValueError: If the path does not name a module (e.g. a bare __init__.py)

    Examples:
        >>> path_to_module("src/game/combat.py")
        'game.combat'
        >>> path_to_module("game/__init__.py")
        'game'
        >>> path_to_module(Path("tools/export.py"))
        'tools.export'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    parts = [part for part in path_str.replace("\\", "/").split("/") if part]

    # Sources under src/<package>/... are imported with src/ on sys.path.
    if len(parts) >= 2 and parts[0] == "src":
        parts = parts[1:]

    if parts and parts[-1].endswith(".py"):
        parts[-1] = parts[-1][:-3]

    if parts and parts[-1] == "__init__":
        parts = parts[:-1]

    if not parts:
        msg = f"Cannot derive a non-empty module name from {path_str!r}"
        raise ValueError(msg)

    return ".".join(parts)
