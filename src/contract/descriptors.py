"""Component descriptors supplied by the host to the graph builder.

Descriptors are plain data. The builder never inspects live classes; a host
(see ``scan.introspect``) turns whatever it can reflect into these records.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from contract.tags import MapTag


class MemberKind(str, Enum):
    """Where a structural type reference was declared."""

    FIELD = "field"
    PROPERTY = "property"
    CONSTRUCTOR_PARAMETER = "constructor_parameter"
    METHOD_PARAMETER = "method_parameter"


class NodeMarker(BaseModel):
    """Marks a component as a graph node."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    tags: MapTag = MapTag.NONE


class DeclaredDependency(BaseModel):
    """An author-written dependency on another component."""

    model_config = ConfigDict(frozen=True)

    target: str = Field(description="type_id of the component depended upon")
    uses: tuple[str, ...] = Field(default_factory=tuple)


class MemberRef(BaseModel):
    """A directly-declared member whose declared type is a class."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: MemberKind
    type_id: str
    assignable_to: tuple[str, ...] = Field(
        default_factory=tuple,
        description="type_ids of every supertype of the member type",
    )

    def refers_to(self, target: str) -> bool:
        return self.type_id == target or target in self.assignable_to


class ExposedMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    alias: str | None = None

    @property
    def reported_name(self) -> str:
        if self.alias is None or not self.alias.strip():
            return self.name
        return self.alias


class ComponentDescriptor(BaseModel):
    """Everything the builder needs to know about one declared component."""

    model_config = ConfigDict(frozen=True)

    type_id: str
    name: str = ""
    module: str | None = None
    is_abstract: bool = False
    marker: NodeMarker | None = None
    comment: str | None = None
    dependencies: tuple[DeclaredDependency, ...] = Field(default_factory=tuple)
    members: tuple[MemberRef, ...] = Field(default_factory=tuple)
    exposed: tuple[ExposedMember, ...] = Field(default_factory=tuple)

    @property
    def short_name(self) -> str:
        if self.name:
            return self.name
        return self.type_id.rsplit(".", 1)[-1]


__all__ = [
    "ComponentDescriptor",
    "DeclaredDependency",
    "ExposedMember",
    "MemberKind",
    "MemberRef",
    "NodeMarker",
]
