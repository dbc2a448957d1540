"""Runtime settings for the devcall launcher."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from devcontrol import __version__


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    log_dir: Path
    compose_binary: tuple[str, ...] = ("docker-compose",)
    docker_binary: str = "docker"
    terminal: str | None = None
    cli_version: str = __version__

    @property
    def telemetry_file(self) -> Path:
        return self.log_dir / "telemetry.jsonl"


def _default_home_dir(environ: Mapping[str, str]) -> Path:
    override = environ.get("DEVCONTROL_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".devcontrol"


def load_settings(environ: Mapping[str, str] | None = None) -> RuntimeSettings:
    env = os.environ if environ is None else environ
    base = _default_home_dir(env)
    compose = shlex.split(env.get("DEVCONTROL_COMPOSE", "")) or ["docker-compose"]
    terminal = env.get("DEVCONTROL_TERMINAL", "").strip().lower() or None
    return RuntimeSettings(
        home_dir=base,
        log_dir=base / "logs",
        compose_binary=tuple(compose),
        docker_binary=env.get("DEVCONTROL_DOCKER", "").strip() or "docker",
        terminal=terminal,
    )


SETTINGS = load_settings()
