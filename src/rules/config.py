from __future__ import annotations

from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.tags import VALID_TAG_NAMES, MapTag, parse_tags

from pathlib import Path

CONFIG_FILENAME = "systemmap.toml"


class InclusionConfig(BaseModel):
    """Which declared components become graph nodes."""

    model_config = ConfigDict(extra="forbid")

    require_marker: bool = Field(
        default=True,
        description="Only classes decorated with @map_node become nodes",
    )
    include_abstract: bool = Field(
        default=True,
        description="Keep abstract classes (those with abstract methods)",
    )
    exclude_prefixes: list[str] = Field(
        default_factory=list,
        description="Module prefixes whose classes never become nodes",
    )


class ViewConfig(BaseModel):
    """Default view settings for tree printing and markdown export."""

    model_config = ConfigDict(extra="forbid")

    reverse: bool = Field(
        default=False,
        description="Start trees from components that depend on nothing",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Tag filter for roots (empty = no filter)",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Any) -> Any:
        if v is None:
            return []

        if not isinstance(v, list):
            msg = "view.tags must be a list of tag names"
            raise TypeError(msg)

        for tag in v:
            if not isinstance(tag, str):
                msg = "view.tags must be a list of str"
                raise TypeError(msg)
            if tag.strip().lower() not in VALID_TAG_NAMES | {"none"}:
                msg = (
                    f"Invalid tag '{tag}'. "
                    f"Valid tags: {', '.join(sorted(VALID_TAG_NAMES))}"
                )
                raise ValueError(msg)

        return v

    @property
    def tag_filter(self) -> MapTag:
        return parse_tags(self.tags)


class SystemMapConfig(BaseModel):
    """Configuration for systemmap graph builds and artifact generation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".systemmap",
        description="Output directory for generated artifacts",
    )
    modules: list[str] = Field(
        default_factory=list,
        description="Module names to import (empty = scan the root for files)",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Python files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    inclusion: InclusionConfig = Field(default_factory=InclusionConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the root.

    The config output_dir must be a non-empty relative path that remains
    within the root after resolution. Absolute paths and paths that escape
    the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> SystemMapConfig:
    """Load configuration from systemmap.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return SystemMapConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SystemMapConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
