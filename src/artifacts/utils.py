"""Utility functions for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import BaseModel


def _write_json(path: Path, model: BaseModel) -> None:
    payload = model.model_dump(mode="json")
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    path.write_bytes(orjson.dumps(payload, option=opts) + b"\n")
