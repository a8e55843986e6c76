"""Decorators and annotation markers that declare component metadata.

Example::

    @map_node("CombatSystem", MapTag.GAMEPLAY)
    @map_comment("Resolves attacks")
    @depends(StatsManager, "pv", "pm")
    @depends("Arena", "round")
    class CombatSystem:
        stats: StatsManager
        log: Annotated[list[str], Exposed("combat_log")]

The markers only store data on the class. ``scan.introspect`` reads it back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from contract.tags import MapTag

if TYPE_CHECKING:
    from collections.abc import Callable

NODE_ATTR = "__map_node__"
COMMENT_ATTR = "__map_comment__"
DEPENDS_ATTR = "__map_depends__"
EXPOSED_ATTR = "__map_exposed__"

_T = TypeVar("_T", bound=type)
_F = TypeVar("_F")


@dataclass(frozen=True)
class Exposed:
    """``Annotated`` metadata marking a field as part of a component's surface."""

    alias: str | None = None


@dataclass(frozen=True)
class _NodeInfo:
    display_name: str
    tags: MapTag


@dataclass(frozen=True)
class _DependsInfo:
    target: type | str
    uses: tuple[str, ...]


def map_node(display_name: str, tags: MapTag = MapTag.NONE) -> Callable[[_T], _T]:
    def decorate(cls: _T) -> _T:
        setattr(cls, NODE_ATTR, _NodeInfo(display_name, tags))
        return cls

    return decorate


def map_comment(comment: str) -> Callable[[_T], _T]:
    def decorate(cls: _T) -> _T:
        setattr(cls, COMMENT_ATTR, comment)
        return cls

    return decorate


def depends(target: type | str, *uses: str) -> Callable[[_T], _T]:
    """Declare that the decorated class depends on ``target``.

    ``target`` is a class, or a name resolved when the class is described:
    a class name (or dotted qualname) from the decorated class's module, or
    a full ``module.QualName`` type id. Names let a class depend on one
    defined later or on one that depends back on it.

    May be applied several times, including more than once for the same
    target; the uses lists are merged when the graph is built.
    """

    def decorate(cls: _T) -> _T:
        # Only the class's own declarations count, never a base class's list.
        declared = list(cls.__dict__.get(DEPENDS_ATTR, ()))
        declared.append(_DependsInfo(target, tuple(uses)))
        setattr(cls, DEPENDS_ATTR, tuple(declared))
        return cls

    return decorate


def exposed(alias: str | None = None) -> Callable[[_F], _F]:
    """Mark a property getter (apply beneath ``@property``) as exposed."""

    def decorate(func: _F) -> _F:
        setattr(func, EXPOSED_ATTR, Exposed(alias))
        return func

    return decorate


__all__ = [
    "COMMENT_ATTR",
    "DEPENDS_ATTR",
    "EXPOSED_ATTR",
    "NODE_ATTR",
    "Exposed",
    "depends",
    "exposed",
    "map_comment",
    "map_node",
]
