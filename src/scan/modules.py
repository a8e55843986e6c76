"""Import modules and enumerate the classes they define."""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path
    from types import ModuleType

logger = logging.getLogger(__name__)


def ensure_import_paths(paths: Iterable[Path]) -> None:
    """Put each existing directory on ``sys.path`` (front, once)."""
    for path in paths:
        if not path.is_dir():
            continue
        entry = str(path.resolve())
        if entry not in sys.path:
            sys.path.insert(0, entry)


def load_modules(module_names: Iterable[str]) -> list[ModuleType]:
    """Import each module by name, skipping the ones that fail.

    A module that raises while importing is unavailable to the build, not
    fatal to it.
    """
    loaded: list[ModuleType] = []
    for name in module_names:
        try:
            module = importlib.import_module(name)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Skipping module %s: %s: %s", name, type(exc).__name__, exc)
            continue
        loaded.append(module)
    return loaded


def iter_module_classes(modules: Iterable[ModuleType]) -> Iterator[type]:
    """Yield classes defined in each module, in definition order.

    Re-exported classes are left to the module that defines them.
    """
    for module in modules:
        for value in list(vars(module).values()):
            if inspect.isclass(value) and value.__module__ == module.__name__:
                yield value


__all__ = ["ensure_import_paths", "iter_module_classes", "load_modules"]
