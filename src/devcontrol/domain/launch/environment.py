"""Environment defaults exported to docker-compose."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple

from .value_objects import LaunchFlags

MIGRATE_VAR = "MIGRATE_ON_STARTUP"
SYNC_TEMPLATES_VAR = "SYNC_TEMPLATES_ON_STARTUP"
UID_VAR = "UID"
GID_VAR = "GID"

BUILD_TOGGLES: Dict[str, str] = {
    "COMPOSE_DOCKER_CLI_BUILD": "1",
    "DOCKER_BUILDKIT": "1",
}

IdProvider = Callable[[], int]


@dataclass(frozen=True)
class EnvironmentResolution:
    values: Dict[str, str]
    notices: Tuple[str, ...] = ()

    def apply_to(self, environ: Mapping[str, str]) -> Dict[str, str]:
        merged = dict(environ)
        merged.update(self.values)
        return merged


def _bool_value(flag: bool) -> str:
    # compose defaults both toggles to true, so false is always written out.
    return "true" if flag else "false"


def _current_uid() -> int:
    return os.getuid()


def _current_gid() -> int:
    return os.getgid()


def resolve_environment(
    flags: LaunchFlags,
    environ: Mapping[str, str],
    *,
    uid_provider: IdProvider = _current_uid,
    gid_provider: IdProvider = _current_gid,
) -> EnvironmentResolution:
    """Fill unset or empty variables from ``flags``; keep any other value as is."""

    defaults: Dict[str, Callable[[], str]] = {
        UID_VAR: lambda: str(uid_provider()),
        GID_VAR: lambda: str(gid_provider()),
        MIGRATE_VAR: lambda: _bool_value(flags.migrate),
        SYNC_TEMPLATES_VAR: lambda: _bool_value(flags.sync_templates),
    }
    values: Dict[str, str] = {}
    notices: list[str] = []
    for name, default in defaults.items():
        current = environ.get(name, "")
        if current:
            values[name] = current
            notices.append(f"Using the already set value for the env variable {name} = {current}")
        else:
            values[name] = default()
    values.update(BUILD_TOGGLES)
    return EnvironmentResolution(values=values, notices=tuple(notices))


__all__ = [
    "BUILD_TOGGLES",
    "EnvironmentResolution",
    "GID_VAR",
    "MIGRATE_VAR",
    "SYNC_TEMPLATES_VAR",
    "UID_VAR",
    "resolve_environment",
]
