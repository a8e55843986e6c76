from __future__ import annotations

from contract.descriptors import (
    ComponentDescriptor,
    DeclaredDependency,
    MemberKind,
    MemberRef,
    NodeMarker,
)
from contract.tags import MapTag
from graph.builder import build_graph
from graph.query import consumers, iter_tree, neighbors, roots


def _component(
    type_id: str,
    display_name: str,
    tags: MapTag = MapTag.NONE,
    *,
    uses: dict[str, list[str]] | None = None,
    holds: list[str] | None = None,
) -> ComponentDescriptor:
    return ComponentDescriptor(
        type_id=type_id,
        marker=NodeMarker(display_name=display_name, tags=tags),
        dependencies=tuple(
            DeclaredDependency(target=target, uses=tuple(names))
            for target, names in (uses or {}).items()
        ),
        members=tuple(
            MemberRef(name=f"f{i}", kind=MemberKind.FIELD, type_id=target)
            for i, target in enumerate(holds or [])
        ),
    )


def _game_graph():
    # hud -> combat -> stats, combat -> entities -> stats
    return build_graph(
        [
            _component("game.Stats", "Stats", MapTag.MANAGER | MapTag.GAMEPLAY),
            _component(
                "game.Entities",
                "Entities",
                MapTag.GAMEPLAY,
                uses={"game.Stats": ["pv", "pm"]},
            ),
            _component(
                "game.Combat",
                "Combat",
                MapTag.GAMEPLAY,
                uses={"game.Entities": ["mobs"]},
                holds=["game.Stats"],
            ),
            _component("game.Hud", "Hud", MapTag.UI, holds=["game.Combat"]),
        ]
    )


def test_roots_are_nodes_without_incoming_edges() -> None:
    graph = _game_graph()

    assert [node.type_id for node in roots(graph)] == ["game.Hud"]


def test_reverse_roots_are_nodes_without_outgoing_edges() -> None:
    graph = _game_graph()

    assert [node.type_id for node in roots(graph, reverse=True)] == ["game.Stats"]


def test_roots_sorted_by_type_id() -> None:
    graph = build_graph(
        [
            _component("game.Zeta", "Zeta"),
            _component("game.Alpha", "Alpha"),
            _component("game.Mid", "Mid"),
        ]
    )

    assert [node.type_id for node in roots(graph)] == [
        "game.Alpha",
        "game.Mid",
        "game.Zeta",
    ]


def test_tag_filter_keeps_matching_roots_only() -> None:
    graph = build_graph(
        [
            _component("game.A", "A", MapTag.GAMEPLAY),
            _component("game.B", "B", MapTag.UI),
        ]
    )

    assert [node.type_id for node in roots(graph, tag_filter=MapTag.GAMEPLAY)] == [
        "game.A"
    ]


def test_tag_filter_falls_back_to_all_matching_nodes() -> None:
    graph = _game_graph()

    gameplay_roots = roots(graph, tag_filter=MapTag.GAMEPLAY)

    assert [node.type_id for node in gameplay_roots] == [
        "game.Combat",
        "game.Entities",
        "game.Stats",
    ]


def test_none_filter_matches_untagged_nodes_but_tag_filter_does_not() -> None:
    graph = build_graph([_component("game.Plain", "Plain")])

    assert [node.type_id for node in roots(graph)] == ["game.Plain"]
    assert roots(graph, tag_filter=MapTag.AUDIO) == []


def test_empty_graph_has_no_roots() -> None:
    graph = build_graph([])

    assert roots(graph) == []
    assert roots(graph, reverse=True, tag_filter=MapTag.UI) == []


def test_neighbors_forward_are_sorted_and_carry_uses() -> None:
    graph = _game_graph()

    links = neighbors(graph, "game.Combat")

    assert [(link.node.type_id, link.uses) for link in links] == [
        ("game.Entities", ("mobs",)),
        ("game.Stats", ()),
    ]


def test_neighbors_backward_mirror_the_edge_uses() -> None:
    graph = _game_graph()

    links = neighbors(graph, "game.Stats", reverse=True)

    assert [(link.node.type_id, link.uses) for link in links] == [
        ("game.Combat", ()),
        ("game.Entities", ("pv", "pm")),
    ]


def test_neighbors_flag_cyclic_edges() -> None:
    graph = build_graph(
        [
            _component("game.A", "A", holds=["game.B"]),
            _component("game.B", "B", holds=["game.A", "game.C"]),
            _component("game.C", "C"),
        ]
    )

    flags = {link.node.type_id: link.cyclic for link in neighbors(graph, "game.B")}

    assert flags == {"game.A": True, "game.C": False}


def test_unknown_node_has_no_neighbors_or_consumers() -> None:
    graph = _game_graph()

    assert neighbors(graph, "game.Missing") == []
    assert consumers(graph, "game.Missing") == []


def test_consumers_sorted_by_display_name() -> None:
    graph = build_graph(
        [
            _component("game.Core", "Core"),
            _component("a.Zed", "Zed", holds=["game.Core"]),
            _component("z.Amy", "Amy", holds=["game.Core"]),
        ]
    )

    assert [node.display_name for node in consumers(graph, "game.Core")] == [
        "Amy",
        "Zed",
    ]


def test_iter_tree_terminates_on_cycles() -> None:
    graph = build_graph(
        [
            _component("game.A", "A", holds=["game.B"]),
            _component("game.B", "B", holds=["game.C"]),
            _component("game.C", "C", holds=["game.A"]),
        ]
    )

    entries = list(iter_tree(graph, roots(graph)))

    assert [(entry.depth, entry.node.type_id) for entry in entries] == [
        (0, "game.A"),
        (1, "game.B"),
        (2, "game.C"),
        (0, "game.B"),
        (1, "game.C"),
        (2, "game.A"),
        (0, "game.C"),
        (1, "game.A"),
        (2, "game.B"),
    ]


def test_iter_tree_shared_visited_prints_each_node_once_per_root() -> None:
    graph = _game_graph()
    start = roots(graph)

    per_path = [
        entry.node.type_id for entry in iter_tree(graph, start, shared_visited=False)
    ]
    shared = [entry.node.type_id for entry in iter_tree(graph, start)]

    assert per_path.count("game.Stats") == 2
    assert shared.count("game.Stats") == 1


def _layered_graph(size: int):
    # node i holds a field of every later node
    names = [f"layer.N{i:02d}" for i in range(size)]
    return build_graph(
        [
            _component(name, name.rsplit(".", 1)[-1], holds=names[i + 1 :])
            for i, name in enumerate(names)
        ]
    )


def test_iter_tree_on_dense_dag_yields_each_node_once() -> None:
    graph = _layered_graph(30)

    entries = list(iter_tree(graph, roots(graph)))

    assert [node.type_id for node in roots(graph)] == ["layer.N00"]
    assert len(entries) == len(graph.nodes)
    assert [entry.depth for entry in entries] == list(range(30))
