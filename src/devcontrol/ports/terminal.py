"""Port definition for opening terminal sessions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from devcontrol.domain.launch import TerminalSessionRequest


class TerminalLaunchError(RuntimeError):
    pass


class TerminalLauncher(ABC):
    name: str = "terminal"

    @abstractmethod
    def open(self, request: TerminalSessionRequest) -> None:
        """Start a session running ``request.command`` without waiting for it."""


__all__ = ["TerminalLaunchError", "TerminalLauncher"]
