from __future__ import annotations

import pytest

from contract.tags import MapTag, format_tags, matches_filter, parse_tags, tag_names


def test_none_filter_matches_every_tag_set() -> None:
    assert matches_filter(MapTag.NONE, MapTag.NONE)
    assert matches_filter(MapTag.UI | MapTag.AUDIO, MapTag.NONE)


def test_filter_matches_any_shared_tag() -> None:
    assert matches_filter(MapTag.MANAGER | MapTag.GAMEPLAY, MapTag.GAMEPLAY)
    assert matches_filter(MapTag.UI, MapTag.UI | MapTag.NETWORK)
    assert not matches_filter(MapTag.UI, MapTag.GAMEPLAY)
    assert not matches_filter(MapTag.NONE, MapTag.GAMEPLAY)


def test_format_tags_uses_declaration_order() -> None:
    assert format_tags(MapTag.GAMEPLAY | MapTag.MANAGER) == "Manager, Gameplay"
    assert format_tags(MapTag.NONE) == "None"
    assert tag_names(MapTag.PERSISTENCE | MapTag.UI) == ["UI", "Persistence"]


def test_parse_tags_is_case_insensitive_and_ignores_none() -> None:
    assert parse_tags(["gameplay", "UI", " Manager "]) == (
        MapTag.GAMEPLAY | MapTag.UI | MapTag.MANAGER
    )
    assert parse_tags(["None", ""]) == MapTag.NONE
    assert parse_tags([]) == MapTag.NONE


def test_parse_tags_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown tag 'physics'"):
        parse_tags(["physics"])
