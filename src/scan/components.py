"""Collect component descriptors for a source root."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scan.files import find_python_files
from scan.introspect import describe_class
from scan.modules import ensure_import_paths, iter_module_classes, load_modules
from utils import path_to_module

if TYPE_CHECKING:
    from pathlib import Path

    from contract.descriptors import ComponentDescriptor
    from rules.config import SystemMapConfig

logger = logging.getLogger(__name__)

# Importing these runs tooling entry points rather than defining components.
_SKIPPED_MODULE_NAMES = frozenset({"setup", "conftest", "noxfile", "__main__"})


def discover_module_names(root: Path, config: SystemMapConfig) -> list[str]:
    """Module names to import: the configured list, else every file under root."""
    if config.modules:
        return list(config.modules)

    names: list[str] = []
    for file_path in find_python_files(
        root,
        output_dir=config.output_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        try:
            name = path_to_module(file_path.relative_to(root))
        except ValueError:
            continue
        if name.rsplit(".", 1)[-1] in _SKIPPED_MODULE_NAMES:
            continue
        names.append(name)
    return names


def collect_components(
    root: Path, config: SystemMapConfig
) -> list[ComponentDescriptor]:
    """Import the modules under ``root`` and describe every class they define.

    Classes that cannot be described are logged and skipped.
    """
    ensure_import_paths([root / "src", root])
    modules = load_modules(discover_module_names(root, config))

    descriptors: list[ComponentDescriptor] = []
    for cls in iter_module_classes(modules):
        try:
            descriptors.append(describe_class(cls))
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Skipping class %s.%s: %s", cls.__module__, cls.__qualname__, exc
            )

    logger.info(
        "Described %d classes from %d modules under %s",
        len(descriptors),
        len(modules),
        root,
    )
    return descriptors


__all__ = ["collect_components", "discover_module_names"]
