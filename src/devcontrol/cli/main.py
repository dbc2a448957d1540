#!/usr/bin/env python3
"""Entry point for the devcall CLI."""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from textwrap import dedent
from typing import Any

from devcontrol import __version__
from devcontrol.adapters.compose import ComposeEngine
from devcontrol.adapters.terminal import probe_terminal_launcher
from devcontrol.app.launch import LaunchService, OwnershipError, TerminalSessionOrchestrator
from devcontrol.app.launch.service import note, warn
from devcontrol.domain.launch import FLAG_TABLE, parse_tokens
from devcontrol.domain.stack import StackDescriptor, StackDescriptorError
from devcontrol.ports.orchestration import OrchestrationError
from devcontrol.settings import SETTINGS
from devcontrol.utils.telemetry import LAUNCH_EVENT, SESSION_EVENT, append_record, build_record, new_run_id

HELP_OVERVIEW = dedent(
    """
    devcall wraps a docker-compose command with the correct config files and environment
    variables for running the stack in dev mode. It provides a few extra custom flags but
    all other arguments will be passed through to docker-compose.

    Example usage:
    - devcall up --build
    - devcall da build
    - devcall da run --no-deps -T backend lint

    By default devcall will also attempt to open terminal tabs which are attached to
    the running dev containers, use the da flag to disable this.

    Usage: devcall [optional custom devcall flags] [commands passed to docker-compose]
    """
)


def usage_text() -> str:
    width = max(len(name) for name in FLAG_TABLE) + 1
    lines = [HELP_OVERVIEW.rstrip(), "", "The devcall custom flags are:"]
    for name, effect in FLAG_TABLE.items():
        lines.append(f"{name.ljust(width)}: {effect.description}")
    lines.append(f"{'help'.ljust(width)}: Show this message.")
    lines.append("")
    lines.append(f"devcall {__version__}")
    return "\n".join(lines)


def _default_project_path() -> Path:
    return Path(os.getcwd())


def _build_service(project_path: Path) -> LaunchService:
    stack = StackDescriptor.load(project_path)
    stack.ensure_compatible(SETTINGS.cli_version)
    engine = ComposeEngine(SETTINGS, stack, project_path)
    sessions = TerminalSessionOrchestrator(probe_terminal_launcher(forced=SETTINGS.terminal))
    return LaunchService(
        engine=engine,
        stack=stack,
        sessions=sessions,
        project_root=project_path,
        docker_binary=SETTINGS.docker_binary,
    )


@dataclass
class _LaunchRecorder:
    """Writes the telemetry of one run; a broken log dir only costs a warning."""

    run_id: str = field(default_factory=new_run_id)
    broken: bool = False

    def record(
        self,
        event: str,
        payload: dict[str, Any],
        *,
        status: str | None = None,
        start: float | None = None,
        level: str = "info",
    ) -> None:
        if self.broken:
            return
        duration = (time.perf_counter() - start) * 1000 if start is not None else None
        record = build_record(event, self.run_id, payload=payload, level=level, status=status, duration_ms=duration)
        try:
            append_record(SETTINGS, record)
        except OSError as exc:
            self.broken = True
            warn(f"Telemetry disabled for this run, cannot write {SETTINGS.telemetry_file}: {exc}")


def main(argv: list[str] | None = None) -> int:
    tokens = sys.argv[1:] if argv is None else list(argv)
    parsed = parse_tokens(tokens)
    if parsed.help_requested:
        print(usage_text())
        return 0
    for message in parsed.notices:
        note(message)

    project_path = _default_project_path()
    try:
        service = _build_service(project_path)
    except StackDescriptorError as exc:
        print(f"devcall ERROR: {exc}", file=sys.stderr)
        return 1

    event_context = {"flags": parsed.flags.to_dict(), "path": str(project_path)}
    recorder = _LaunchRecorder()
    recorder.record(LAUNCH_EVENT, event_context, status="start")
    start = time.perf_counter()
    try:
        outcome = service.launch(parsed.flags, os.environ)
    except OwnershipError as exc:
        print(f"devcall ERROR: {exc}", file=sys.stderr)
        recorder.record(LAUNCH_EVENT, event_context | {"error": "ownership"}, status="error", start=start, level="error")
        return 1
    except OrchestrationError as exc:
        print(f"devcall ERROR: {exc}", file=sys.stderr)
        failure = {"error": str(exc), "exit_code": exc.returncode}
        recorder.record(LAUNCH_EVENT, event_context | failure, status="error", start=start, level="error")
        return exc.returncode if exc.returncode > 0 else 1
    except KeyboardInterrupt:
        print("\ndevcall: interrupted.", file=sys.stderr)
        recorder.record(LAUNCH_EVENT, event_context | {"error": "interrupted"}, status="error", start=start, level="error")
        return 130

    for result in outcome.sessions:
        recorder.record(
            SESSION_EVENT,
            {
                "title": result.title,
                "service": result.service,
                "resolved": result.resolved,
                "strategy": result.strategy,
            },
            level="info" if result.resolved else "warn",
        )
    recorder.record(
        LAUNCH_EVENT,
        event_context
        | {
            "args": list(outcome.plan.args),
            "attached": not outcome.plan.dont_attach,
            "sessions": [result.title for result in outcome.sessions],
            "strategies": service.sessions.strategies_used,
        },
        status="success",
        start=start,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
