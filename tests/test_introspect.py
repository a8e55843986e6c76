from __future__ import annotations

import abc
import functools
from typing import Annotated, ClassVar, Optional

from contract.descriptors import MemberKind
from contract.models import IssueKind
from contract.markers import Exposed, depends, exposed, map_comment, map_node
from contract.tags import MapTag
from graph.builder import build_graph
from scan.introspect import collect_exposed, collect_members, describe_class, type_id_of


class Service:
    pass


class AudioService(Service):
    pass


class Logger:
    pass


@map_node("Player", MapTag.GAMEPLAY | MapTag.AUDIO)
@map_comment("The one the user controls")
@depends(Logger, "info", " ")
@depends(Logger, "warn")
class Player:
    audio: AudioService
    backup: Optional[Service] = None
    either: Logger | AudioService | None = None
    registry: ClassVar[Service]
    many: list[Service]
    count: int = 0
    health: Annotated[int, Exposed("hp")] = 100
    name: Annotated[str, Exposed] = ""

    def __init__(self, logger: Logger, speed: float = 1.0) -> None:
        self.logger = logger
        self.speed = speed

    def __eq__(self, other: Service) -> bool:
        return self is other

    def attach(self, service: Service, *, label: str = "") -> None:
        self.service = service

    @staticmethod
    def build(logger: Logger) -> None:
        return None

    @property
    @exposed("lvl")
    def level(self) -> Logger:
        return self.logger

    @functools.cached_property
    def cached(self) -> Service:
        return Service()


class Veteran(Player):
    rank: Annotated[int, Exposed()] = 1


class Abstract(abc.ABC):
    @abc.abstractmethod
    def run(self) -> None: ...


@map_node("Server", MapTag.NETWORK)
@depends("Client", "push")
@depends("Ghost")
class Server:
    pass


@map_node("Client", MapTag.NETWORK)
@depends(f"{__name__}.Server", "connect")
class Client:
    pass


def _refs(cls: type) -> list[tuple[str, MemberKind, str]]:
    return [(ref.name, ref.kind, ref.type_id) for ref in collect_members(cls)]


def test_type_id_is_module_and_qualname() -> None:
    assert type_id_of(Player) == f"{__name__}.Player"


def test_fields_unwrap_optional_and_union_but_not_containers() -> None:
    refs = _refs(Player)
    fields = [
        (name, type_id) for name, kind, type_id in refs if kind is MemberKind.FIELD
    ]

    assert fields == [
        ("audio", f"{__name__}.AudioService"),
        ("backup", f"{__name__}.Service"),
        ("either", f"{__name__}.Logger"),
        ("either", f"{__name__}.AudioService"),
    ]


def test_member_refs_carry_supertypes() -> None:
    audio = next(ref for ref in collect_members(Player) if ref.name == "audio")

    assert audio.assignable_to == (f"{__name__}.Service",)
    assert audio.refers_to(f"{__name__}.Service")
    assert not audio.refers_to(f"{__name__}.Logger")


def test_constructor_method_and_property_references() -> None:
    refs = _refs(Player)
    others = [ref for ref in refs if ref[1] is not MemberKind.FIELD]

    assert others == [
        ("__init__.logger", MemberKind.CONSTRUCTOR_PARAMETER, f"{__name__}.Logger"),
        ("attach.service", MemberKind.METHOD_PARAMETER, f"{__name__}.Service"),
        ("build.logger", MemberKind.METHOD_PARAMETER, f"{__name__}.Logger"),
        ("level", MemberKind.PROPERTY, f"{__name__}.Logger"),
        ("cached", MemberKind.PROPERTY, f"{__name__}.Service"),
    ]


def test_inherited_members_are_not_structural_references() -> None:
    assert _refs(Veteran) == []


def test_exposed_members_include_inherited_and_aliases() -> None:
    found = [(member.name, member.reported_name) for member in collect_exposed(Veteran)]

    assert found == [
        ("rank", "rank"),
        ("health", "hp"),
        ("name", "name"),
        ("level", "lvl"),
    ]


def test_describe_class_reads_own_markers() -> None:
    descriptor = describe_class(Player)

    assert descriptor.type_id == f"{__name__}.Player"
    assert descriptor.name == "Player"
    assert descriptor.module == __name__
    assert descriptor.marker is not None
    assert descriptor.marker.display_name == "Player"
    assert descriptor.marker.tags == MapTag.GAMEPLAY | MapTag.AUDIO
    assert descriptor.comment == "The one the user controls"
    assert [(dep.target, dep.uses) for dep in descriptor.dependencies] == [
        (f"{__name__}.Logger", ("warn",)),
        (f"{__name__}.Logger", ("info", " ")),
    ]


def test_subclass_of_marked_class_is_not_marked() -> None:
    descriptor = describe_class(Veteran)

    assert descriptor.marker is None
    assert descriptor.comment is None
    assert descriptor.dependencies == ()


def test_abstract_classes_are_flagged() -> None:
    assert describe_class(Abstract).is_abstract
    assert not describe_class(Player).is_abstract


def test_unresolvable_annotations_are_dropped_and_the_rest_resolved() -> None:
    namespace: dict[str, object] = {"__name__": __name__, "Service": Service}
    exec(  # noqa: S102
        "class Partial:\n"
        "    known: 'Service'\n"
        "    missing: 'DoesNotExist'\n",
        namespace,
    )
    partial = namespace["Partial"]

    assert isinstance(partial, type)
    assert _refs(partial) == [("known", MemberKind.FIELD, f"{__name__}.Service")]


def test_string_dependency_targets_resolve_to_type_ids() -> None:
    server = describe_class(Server)

    assert [(dep.target, dep.uses) for dep in server.dependencies] == [
        ("Ghost", ()),
        (f"{__name__}.Client", ("push",)),
    ]


def test_classes_in_one_module_can_declare_each_other() -> None:
    graph = build_graph([describe_class(Server), describe_class(Client)])

    assert graph.edges == {
        f"{__name__}.Server": (f"{__name__}.Client",),
        f"{__name__}.Client": (f"{__name__}.Server",),
    }
    assert graph.uses[(f"{__name__}.Server", f"{__name__}.Client")] == ("push",)
    assert [(issue.kind, issue.details) for issue in graph.issues] == [
        (IssueKind.MUTUAL_DEPENDENCY, "Server ↔ Client"),
    ]
