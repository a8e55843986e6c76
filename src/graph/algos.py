"""Cycle and mutual-dependency detection over a component adjacency map."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.models import EdgeKey, Issue, IssueKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from contract.models import Node

CYCLE_TITLE = "Cycle detected"
MUTUAL_TITLE = "Mutual dependency (A ↔ B)"

_UNVISITED = 0
_ON_STACK = 1
_FINISHED = 2


class _CycleState:
    """Mutable state container for the three-colour cycle search."""

    def __init__(self) -> None:
        self.colors: dict[str, int] = {}
        self.stack: list[str] = []
        self.signatures: set[str] = set()
        self.cycles: list[list[str]] = []


def cycle_signature(cycle: Sequence[str]) -> str:
    """Join a closed chain into its dedup key.

    The key is rotation-sensitive: ``a->b->a`` and ``b->a->b`` differ.
    """
    return "->".join(cycle)


def _extract_cycle(stack: list[str], entry: str) -> list[str]:
    """Walk the stack from the top down to ``entry`` and close the loop."""
    cycle: list[str] = []
    for node in reversed(stack):
        cycle.append(node)
        if node == entry:
            break
    cycle.reverse()
    cycle.append(entry)
    return cycle


def _visit(node: str, edges: Mapping[str, Sequence[str]], state: _CycleState) -> None:
    state.colors[node] = _ON_STACK
    state.stack.append(node)

    for target in edges.get(node, ()):
        color = state.colors.get(target, _UNVISITED)
        if color == _UNVISITED:
            _visit(target, edges, state)
        elif color == _ON_STACK:
            cycle = _extract_cycle(state.stack, target)
            signature = cycle_signature(cycle)
            if signature not in state.signatures:
                state.signatures.add(signature)
                state.cycles.append(cycle)

    state.stack.pop()
    state.colors[node] = _FINISHED


def find_cycles(
    node_ids: Iterable[str], edges: Mapping[str, Sequence[str]]
) -> list[list[str]]:
    """Find closed dependency chains with a depth-first search.

    A search is launched from every node not yet visited, in ``node_ids``
    order. Each back edge to a node still on the stack yields one chain
    ``[n0, ..., nk, n0]``.

    Args:
        node_ids: Nodes in the order searches are launched
        edges: Ordered adjacency map

    Returns:
        Closed chains in discovery order, each reported once per signature
    """
    state = _CycleState()

    for node in node_ids:
        if state.colors.get(node, _UNVISITED) == _UNVISITED:
            _visit(node, edges, state)

    return state.cycles


def _pair_key(a: str, b: str) -> str:
    first, second = (a, b) if a <= b else (b, a)
    return f"{first}<->{second}"


def find_mutual_dependencies(
    edges: Mapping[str, Sequence[str]],
) -> list[tuple[str, str]]:
    """Return each unordered pair with edges in both directions, once.

    Pairs are ordered as first seen while iterating ``edges``.
    """
    seen: set[str] = set()
    pairs: list[tuple[str, str]] = []

    for a, targets in edges.items():
        for b in targets:
            if a == b or a not in edges.get(b, ()):
                continue
            key = _pair_key(a, b)
            if key in seen:
                continue
            seen.add(key)
            pairs.append((a, b))

    return pairs


def detect_issues(
    nodes: Sequence[Node], edges: Mapping[str, Sequence[str]]
) -> tuple[list[Issue], set[EdgeKey]]:
    """Run the mutual-dependency pass then the cycle pass.

    Two-node chains found by the cycle pass are already covered by the mutual
    pass and are not reported twice, but their edges are still marked cyclic.

    Returns:
        Issues in report order and the set of edges that lie on a cycle
    """
    names = {node.type_id: node.display_name for node in nodes}

    def display(type_id: str) -> str:
        return names.get(type_id, type_id.rsplit(".", 1)[-1])

    issues: list[Issue] = []
    cyclic_edges: set[EdgeKey] = set()

    for a, b in find_mutual_dependencies(edges):
        issues.append(
            Issue(
                kind=IssueKind.MUTUAL_DEPENDENCY,
                title=MUTUAL_TITLE,
                details=f"{display(a)} ↔ {display(b)}",
                signature=_pair_key(a, b),
                path=(a, b),
            )
        )
        cyclic_edges.add((a, b))
        cyclic_edges.add((b, a))

    for cycle in find_cycles([node.type_id for node in nodes], edges):
        cyclic_edges.update(zip(cycle, cycle[1:]))
        if len(cycle) <= 3:
            continue
        issues.append(
            Issue(
                kind=IssueKind.CYCLE,
                title=CYCLE_TITLE,
                details=" → ".join(display(type_id) for type_id in cycle),
                signature=cycle_signature(cycle),
                path=tuple(cycle),
            )
        )

    return issues, cyclic_edges


__all__ = [
    "CYCLE_TITLE",
    "MUTUAL_TITLE",
    "cycle_signature",
    "detect_issues",
    "find_cycles",
    "find_mutual_dependencies",
]
