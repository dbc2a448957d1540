"""Builds per-service log/exec commands and opens a session for each."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, replace
from typing import Iterable, List, Mapping

from devcontrol.domain.launch import AttachMode, ServiceAttachSpec
from devcontrol.ports.orchestration import ContainerLookupError, OrchestrationEngine

from .sessions import TerminalSessionOrchestrator


@dataclass(frozen=True)
class AttachResult:
    title: str
    service: str
    command: str
    resolved: bool
    strategy: str | None = None


def logs_command(container: str, docker: str = "docker") -> str:
    name = shlex.quote(container)
    return f"{docker} logs {name} && {docker} attach {name}"


def exec_command(container: str, command: str, docker: str = "docker") -> str:
    return f"{docker} exec -it {shlex.quote(container)} {command}"


def failing_command(message: str) -> str:
    return f"echo {shlex.quote('devcall ERROR: ' + message)} >&2; exit 1"


class ContainerAttacher:
    def __init__(
        self,
        engine: OrchestrationEngine,
        sessions: TerminalSessionOrchestrator,
        *,
        docker_binary: str = "docker",
    ) -> None:
        self._engine = engine
        self._sessions = sessions
        self._docker = docker_binary

    def build_command(self, spec: ServiceAttachSpec, env: Mapping[str, str] | None = None) -> AttachResult:
        try:
            container = self._engine.container_name(spec.service, env)
        except ContainerLookupError as exc:
            return AttachResult(spec.title, spec.service, failing_command(str(exc)), resolved=False)
        if spec.mode is AttachMode.EXEC:
            command = exec_command(container, spec.exec_command or "", self._docker)
        else:
            command = logs_command(container, self._docker)
        return AttachResult(spec.title, spec.service, command, resolved=True)

    def attach_all(
        self, specs: Iterable[ServiceAttachSpec], env: Mapping[str, str] | None = None
    ) -> List[AttachResult]:
        results: List[AttachResult] = []
        for spec in specs:
            result = self.build_command(spec, env)
            strategy = self._sessions.open(result.title, result.command)
            results.append(replace(result, strategy=strategy))
        return results


__all__ = ["AttachResult", "ContainerAttacher", "exec_command", "failing_command", "logs_command"]
