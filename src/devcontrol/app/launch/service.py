"""Application service running the devcall launch pipeline."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping

from devcontrol.domain.launch import (
    CallKind,
    EnvironmentResolution,
    LaunchFlags,
    RewritePlan,
    resolve_environment,
    rewrite,
)
from devcontrol.domain.stack import StackDescriptor
from devcontrol.ports.orchestration import OrchestrationEngine

from .attacher import AttachResult, ContainerAttacher
from .ownership import OwnershipError, OwnershipReport, check_ownership, remediation_text
from .sessions import TerminalSessionOrchestrator


@dataclass
class LaunchOutcome:
    plan: RewritePlan
    environment: EnvironmentResolution
    sessions: List[AttachResult] = field(default_factory=list)


def note(message: str) -> None:
    print(f"devcall: {message}")


def warn(message: str) -> None:
    print(f"devcall WARNING: {message}", file=sys.stderr)


@dataclass
class LaunchService:
    """Runs ownership check, environment, rewrite, compose calls, then attaches."""

    engine: OrchestrationEngine
    stack: StackDescriptor
    sessions: TerminalSessionOrchestrator
    project_root: Path
    docker_binary: str = "docker"

    def check_ownership(self, flags: LaunchFlags) -> OwnershipReport:
        report = check_ownership(self.project_root)
        if report.clean:
            return report
        if flags.exit_if_other_owners_found:
            raise OwnershipError(remediation_text(report.user))
        warn(
            f"Files not owned by your current user: {report.user} found in this repo.\n"
            "Continuing as 'ignore_ownership' argument provided."
        )
        return report

    def launch(self, flags: LaunchFlags, environ: Mapping[str, str]) -> LaunchOutcome:
        self.check_ownership(flags)

        resolution = resolve_environment(flags, environ)
        for message in resolution.notices:
            note(message)
        env = resolution.apply_to(environ)

        plan = rewrite(flags.passthrough, flags, db_volume=self.stack.db_volume)
        for message in plan.notices:
            note(message)

        print("devcall running docker-compose commands:\n------------------------------------------------\n")
        self._run_prelude(plan, env)
        print(f"+ {self.engine.describe(plan.args)}")
        self.engine.run(plan.args, env)

        outcome = LaunchOutcome(plan=plan, environment=resolution)
        if plan.dont_attach:
            return outcome
        attacher = ContainerAttacher(self.engine, self.sessions, docker_binary=self.docker_binary)
        outcome.sessions = attacher.attach_all(self.stack.services, env)
        return outcome

    def _run_prelude(self, plan: RewritePlan, env: Mapping[str, str]) -> None:
        for call in plan.prelude:
            if call.kind is CallKind.REMOVE_VOLUME:
                for volume in call.args:
                    if not self.engine.remove_volume(volume, env):
                        note(f"Volume {volume} was not removed (it may not exist).")
                continue
            print(f"+ {self.engine.describe(call.args)}")
            self.engine.run(call.args, env)


__all__ = ["LaunchOutcome", "LaunchService", "note", "warn"]
