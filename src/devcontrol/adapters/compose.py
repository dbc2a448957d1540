"""docker-compose backed orchestration engine."""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import List, Mapping, Sequence

from devcontrol.domain.stack import StackDescriptor
from devcontrol.ports.orchestration import ContainerLookupError, OrchestrationEngine, OrchestrationError
from devcontrol.settings import RuntimeSettings


class ComposeEngine(OrchestrationEngine):
    """Issues docker-compose / docker commands for a project stack."""

    def __init__(self, settings: RuntimeSettings, stack: StackDescriptor, project_root: Path) -> None:
        self._settings = settings
        self._stack = stack
        self._root = project_root

    def compose_command(self, args: Sequence[str]) -> List[str]:
        command = list(self._settings.compose_binary)
        for manifest in self._stack.compose_files:
            command.extend(["-f", manifest])
        command.extend(args)
        return command

    def describe(self, args: Sequence[str]) -> str:
        return shlex.join(self.compose_command(args))

    def run(self, args: Sequence[str], env: Mapping[str, str]) -> None:
        command = self.compose_command(args)
        result = self._execute(command, env=env)
        if result.returncode != 0:
            raise OrchestrationError(
                f"{shlex.join(command)} exited with status {result.returncode}",
                returncode=result.returncode,
            )

    def remove_volume(self, name: str, env: Mapping[str, str]) -> bool:
        command = [self._settings.docker_binary, "volume", "rm", name]
        try:
            result = self._execute(command, env=env)
        except OrchestrationError:
            return False
        return result.returncode == 0

    def container_name(self, service: str, env: Mapping[str, str] | None = None) -> str:
        container_id = self._capture(self.compose_command(["ps", "-q", service]), service, env)
        if not container_id:
            raise ContainerLookupError(f"No running container found for service '{service}'")
        name = self._capture(
            [self._settings.docker_binary, "inspect", "-f", "{{.Name}}", container_id],
            service,
            env,
        )
        if not name:
            raise ContainerLookupError(f"Container {container_id} for service '{service}' has no name")
        return name.lstrip("/")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _execute(self, command: List[str], *, env: Mapping[str, str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(command, cwd=self._root, env=dict(env))
        except FileNotFoundError as exc:
            raise OrchestrationError(
                f"Executable missing: {command[0]}. Install it or point DEVCONTROL_COMPOSE / "
                "DEVCONTROL_DOCKER at a working binary.",
                returncode=127,
            ) from exc

    def _capture(self, command: List[str], service: str, env: Mapping[str, str] | None) -> str:
        try:
            result = subprocess.run(
                command,
                cwd=self._root,
                env=dict(env) if env is not None else None,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise ContainerLookupError(f"Cannot query service '{service}': {command[0]} not found") from exc
        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit {result.returncode}"
            raise ContainerLookupError(f"Cannot query service '{service}': {detail}")
        return result.stdout.strip()


__all__ = ["ComposeEngine"]
