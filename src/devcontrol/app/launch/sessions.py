"""Fire-and-forget terminal sessions with manual fallback."""

from __future__ import annotations

from typing import List

from devcontrol.adapters.terminal import ManualInstructionsLauncher
from devcontrol.domain.launch import TerminalSessionRequest
from devcontrol.ports.terminal import TerminalLaunchError, TerminalLauncher


class TerminalSessionOrchestrator:
    """Opens one titled session per request using the probed launcher.

    A launcher that fails degrades the request to printed instructions;
    the run itself never aborts because a terminal could not be opened.
    """

    def __init__(self, launcher: TerminalLauncher, fallback: ManualInstructionsLauncher | None = None) -> None:
        self._launcher = launcher
        if fallback is None:
            if isinstance(launcher, ManualInstructionsLauncher):
                fallback = launcher
            else:
                fallback = ManualInstructionsLauncher(
                    f"{launcher.name} could not open a terminal, falling back to manual instructions."
                )
        self._fallback = fallback
        self._opened: List[str] = []

    @property
    def launcher(self) -> TerminalLauncher:
        return self._launcher

    @property
    def strategies_used(self) -> List[str]:
        return list(self._opened)

    def open(self, title: str, command: str) -> str:
        """Open one session and return the name of the strategy that handled it."""
        request = TerminalSessionRequest(title=title, command=command)
        try:
            self._launcher.open(request)
        except (OSError, TerminalLaunchError):
            self._fallback.open(request)
            self._opened.append(self._fallback.name)
            return self._fallback.name
        self._opened.append(self._launcher.name)
        return self._launcher.name


__all__ = ["TerminalSessionOrchestrator"]
