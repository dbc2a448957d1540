"""Packaged resources for devcontrol."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

import yaml

__all__ = ["load_default_stack", "load_schema"]


@lru_cache(maxsize=1)
def load_default_stack() -> Dict[str, Any]:
    """Return the stack descriptor payload shipped with the package."""

    raw = (resources.files(__name__) / "stack.default.yaml").read_text("utf-8")
    return yaml.safe_load(raw) or {}


@lru_cache(maxsize=None)
def load_schema(name: str) -> Dict[str, Any]:
    resource = resources.files(__name__) / name
    with resource.open("r", encoding="utf-8") as handle:
        return json.load(handle)
