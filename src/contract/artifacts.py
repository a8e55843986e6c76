"""Artifact contract definitions.

Filenames and formats written by ``artifacts.write`` and checked by
``contract.validation``.
"""

from __future__ import annotations

from dataclasses import dataclass

from contract.report import SCHEMA_VERSION

# Report schema version for exported artifacts.
ARTIFACT_SCHEMA_VERSION = SCHEMA_VERSION

# Artifact filename constants (stable contract identifiers).
REPORT_JSON = "report.json"
MAP_MARKDOWN = "map.md"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for an exported artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "report": ArtifactSpec(
        filename=REPORT_JSON,
        format="json",
        required_fields_note="MapReport fields required by contract.",
    ),
    "map": ArtifactSpec(
        filename=MAP_MARKDOWN,
        format="markdown",
        required_fields_note="Markdown tree starting with a level-1 heading.",
    ),
}


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "MAP_MARKDOWN",
    "REPORT_JSON",
    "ArtifactSpec",
]
