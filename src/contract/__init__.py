"""Stable contract surface for systemmap.

Descriptors flow in from the host, graph models and report records flow out to
presentation collaborators. Treat these exports as the authoritative boundary.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    MAP_MARKDOWN,
    REPORT_JSON,
    ArtifactSpec,
)
from contract.descriptors import (
    ComponentDescriptor,
    DeclaredDependency,
    ExposedMember,
    MemberKind,
    MemberRef,
    NodeMarker,
)
from contract.models import Edge, Issue, IssueKind, MapGraph, Node
from contract.tags import MapTag


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "MAP_MARKDOWN",
    "REPORT_JSON",
    "ArtifactSpec",
    "ComponentDescriptor",
    "DeclaredDependency",
    "Edge",
    "ExposedMember",
    "Issue",
    "IssueKind",
    "MapGraph",
    "MapTag",
    "MemberKind",
    "MemberRef",
    "Node",
    "NodeMarker",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
