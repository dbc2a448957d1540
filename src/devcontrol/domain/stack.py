"""Stack descriptor: compose files, database volume and the attach table."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

import yaml
from jsonschema import Draft202012Validator
from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import Version

from devcontrol.domain.launch.value_objects import ServiceAttachSpec
from devcontrol.resources import load_default_stack, load_schema

STACK_DESCRIPTOR = "devcall.yaml"
_SCHEMA_RESOURCE = "stack.schema.json"


class StackDescriptorError(RuntimeError):
    """Raised when devcall.yaml cannot be used."""


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    return Draft202012Validator(load_schema(_SCHEMA_RESOURCE))


def iter_schema_errors(payload: Dict[str, Any]) -> Iterator[Tuple[str, str]]:
    """Yield (path, message) pairs for schema issues in a descriptor payload."""
    for error in _validator().iter_errors(payload):
        path = ".".join(str(item) for item in error.absolute_path)
        yield path, error.message


@dataclass(frozen=True)
class StackDescriptor:
    compose_files: Tuple[str, ...]
    db_volume: str
    services: Tuple[ServiceAttachSpec, ...] = field(default_factory=tuple)
    requires: str | None = None
    source: Path | None = None

    def ensure_compatible(self, cli_version: str) -> None:
        if not self.requires:
            return
        try:
            specifier = SpecifierSet(self.requires)
        except InvalidSpecifier as exc:
            raise StackDescriptorError(f"Invalid 'requires' specifier {self.requires!r}: {exc}") from exc
        if not specifier.contains(Version(cli_version), prereleases=True):
            raise StackDescriptorError(
                f"Stack descriptor requires devcall {self.requires}, running {cli_version}."
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, source: Path | None = None) -> "StackDescriptor":
        defaults = load_default_stack()
        errors = [f"{path or '<root>'}: {message}" for path, message in iter_schema_errors(data)]
        if errors:
            origin = source or "<inline>"
            raise StackDescriptorError(f"Invalid stack descriptor {origin}: " + "; ".join(errors))
        services_raw = data.get("services", defaults.get("services", []))
        try:
            services = tuple(ServiceAttachSpec.from_dict(item) for item in services_raw)
        except ValueError as exc:
            raise StackDescriptorError(str(exc)) from exc
        return cls(
            compose_files=tuple(data.get("compose_files", defaults["compose_files"])),
            db_volume=str(data.get("db_volume", defaults["db_volume"])),
            services=services,
            requires=data.get("requires"),
            source=source,
        )

    @classmethod
    def load(cls, project_root: Path) -> "StackDescriptor":
        """Load ``devcall.yaml`` from ``project_root`` or fall back to the packaged stack."""

        path = project_root / STACK_DESCRIPTOR
        if not path.exists():
            return cls.from_dict(load_default_stack())
        try:
            data = yaml.safe_load(path.read_text("utf-8")) or {}
        except yaml.YAMLError as exc:
            raise StackDescriptorError(f"Cannot parse {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StackDescriptorError(f"{path} must contain a mapping")
        return cls.from_dict(data, source=path)


__all__ = ["STACK_DESCRIPTOR", "StackDescriptor", "StackDescriptorError", "iter_schema_errors"]
