"""Category tags carried by map nodes."""

from __future__ import annotations

from enum import Flag
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class MapTag(Flag):
    """Combinable component categories."""

    NONE = 0
    MANAGER = 1 << 1
    UI = 1 << 2
    GAMEPLAY = 1 << 3
    AUDIO = 1 << 4
    NETWORK = 1 << 5
    PERSISTENCE = 1 << 6


_DISPLAY_NAMES: dict[MapTag, str] = {
    MapTag.MANAGER: "Manager",
    MapTag.UI: "UI",
    MapTag.GAMEPLAY: "Gameplay",
    MapTag.AUDIO: "Audio",
    MapTag.NETWORK: "Network",
    MapTag.PERSISTENCE: "Persistence",
}

VALID_TAG_NAMES = frozenset(name.lower() for name in _DISPLAY_NAMES.values())


def matches_filter(tags: MapTag, tag_filter: MapTag) -> bool:
    """Return True when ``tags`` passes ``tag_filter``.

    ``MapTag.NONE`` as a filter matches everything. As a node's own tag set it
    only matches the wildcard filter.
    """
    if tag_filter == MapTag.NONE:
        return True
    return bool(tags & tag_filter)


def format_tags(tags: MapTag) -> str:
    """Render tags as ``"Manager, Gameplay"`` (``"None"`` when empty)."""
    names = tag_names(tags)
    if not names:
        return "None"
    return ", ".join(names)


def tag_names(tags: MapTag) -> list[str]:
    return [label for flag, label in _DISPLAY_NAMES.items() if flag & tags]


def parse_tags(names: Iterable[str]) -> MapTag:
    """Combine tag names (case-insensitive) into a single ``MapTag``.

    Raises:
        ValueError: If a name is not a known tag.
    """
    by_name = {label.lower(): flag for flag, label in _DISPLAY_NAMES.items()}
    result = MapTag.NONE
    for raw in names:
        name = raw.strip().lower()
        if not name or name == "none":
            continue
        if name not in by_name:
            msg = (
                f"Unknown tag '{raw}'. "
                f"Valid tags: {', '.join(sorted(VALID_TAG_NAMES))}"
            )
            raise ValueError(msg)
        result |= by_name[name]
    return result


__all__ = [
    "VALID_TAG_NAMES",
    "MapTag",
    "format_tags",
    "matches_filter",
    "parse_tags",
    "tag_names",
]
