"""Exported report schema.

This is the JSON shape consumed by presentation collaborators.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = 1


class DependencyRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target: str
    uses: list[str] = Field(default_factory=list)
    cyclic: bool = False


class NodeRecord(BaseModel):
    """A node as listed in the report."""

    model_config = ConfigDict(extra="forbid")

    type_id: str
    display_name: str
    tags: list[str] = Field(default_factory=list)
    comment: str | None = None
    exposed: list[str] = Field(default_factory=list)
    dependencies: list[DependencyRecord] = Field(default_factory=list)
    consumers: list[str] = Field(default_factory=list)


class IssueRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: str
    title: str
    details: str
    path: list[str] = Field(default_factory=list)


class MapReport(BaseModel):
    """Full report: ordered nodes with consumers, ordered issues."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=SCHEMA_VERSION)
    node_count: int
    edge_count: int
    nodes: list[NodeRecord] = Field(default_factory=list)
    issues: list[IssueRecord] = Field(default_factory=list)


__all__ = [
    "SCHEMA_VERSION",
    "DependencyRecord",
    "IssueRecord",
    "MapReport",
    "NodeRecord",
]
