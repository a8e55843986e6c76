"""Inclusion policy deciding which components become graph nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.descriptors import NodeMarker
from contract.tags import MapTag

if TYPE_CHECKING:
    from contract.descriptors import ComponentDescriptor
    from rules.config import InclusionConfig


def is_excluded_module(module: str | None, prefixes: list[str]) -> bool:
    """Check whether ``module`` falls under one of the excluded prefixes.

    A prefix matches the module itself or any of its submodules, so
    ``"tests"`` excludes ``tests.fixtures`` but not ``testsuite``.
    """
    if module is None:
        return False
    for prefix in prefixes:
        if module == prefix or module.startswith(f"{prefix}."):
            return True
    return False


def resolve_marker(
    descriptor: ComponentDescriptor, policy: InclusionConfig
) -> NodeMarker | None:
    """Return the node marker to use, or None when the component is skipped."""
    if descriptor.is_abstract and not policy.include_abstract:
        return None

    if is_excluded_module(descriptor.module, policy.exclude_prefixes):
        return None

    if descriptor.marker is not None:
        return descriptor.marker

    if policy.require_marker:
        return None

    return NodeMarker(display_name=descriptor.short_name, tags=MapTag.NONE)
