"""Value objects shared by the launch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


DETACH_MARKERS = frozenset({"-d", "--detach"})
FORCED_REMOVE_ARGS: Tuple[str, ...] = ("rm", "--stop", "-v", "--force")


@dataclass(frozen=True)
class LaunchFlags:
    """Launcher configuration parsed from the leading custom flags."""

    migrate: bool = True
    sync_templates: bool = True
    dont_attach: bool = False
    exit_if_other_owners_found: bool = True
    delete_db_volume: bool = False
    up_down_restart: bool = False
    passthrough: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "migrate": self.migrate,
            "sync_templates": self.sync_templates,
            "dont_attach": self.dont_attach,
            "exit_if_other_owners_found": self.exit_if_other_owners_found,
            "delete_db_volume": self.delete_db_volume,
            "up_down_restart": self.up_down_restart,
            "passthrough": list(self.passthrough),
        }


@dataclass(frozen=True)
class TerminalSessionRequest:
    title: str
    command: str


class AttachMode(str, Enum):
    LOGS = "logs"
    EXEC = "exec"


@dataclass(frozen=True)
class ServiceAttachSpec:
    """One row of the post-startup attach table."""

    title: str
    service: str
    mode: AttachMode = AttachMode.LOGS
    exec_command: str | None = None

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("Attach spec title must be a non-empty string")
        if not self.service.strip():
            raise ValueError("Attach spec service must be a non-empty string")
        if self.mode is AttachMode.EXEC and not (self.exec_command or "").strip():
            raise ValueError(f"Attach spec '{self.title}' uses exec mode without a command")
        if self.mode is AttachMode.LOGS and self.exec_command:
            raise ValueError(f"Attach spec '{self.title}' streams logs and cannot carry a command")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceAttachSpec":
        exec_command = data.get("exec")
        return cls(
            title=str(data["title"]),
            service=str(data["service"]),
            mode=AttachMode.EXEC if exec_command else AttachMode.LOGS,
            exec_command=str(exec_command) if exec_command else None,
        )


class CallKind(str, Enum):
    COMPOSE = "compose"
    REMOVE_VOLUME = "remove_volume"


@dataclass(frozen=True)
class OrchestrationCall:
    """A call issued to the orchestration engine before the main invocation."""

    kind: CallKind
    args: Tuple[str, ...]
    best_effort: bool = False


@dataclass(frozen=True)
class RewritePlan:
    prelude: Tuple[OrchestrationCall, ...]
    args: Tuple[str, ...]
    dont_attach: bool
    notices: Tuple[str, ...] = field(default_factory=tuple)


__all__ = [
    "AttachMode",
    "CallKind",
    "DETACH_MARKERS",
    "FORCED_REMOVE_ARGS",
    "LaunchFlags",
    "OrchestrationCall",
    "RewritePlan",
    "ServiceAttachSpec",
    "TerminalSessionRequest",
]
