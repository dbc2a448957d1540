"""Port definition for the container orchestration engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Sequence


class OrchestrationError(RuntimeError):
    """Raised when a synchronous orchestration call fails."""

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class ContainerLookupError(RuntimeError):
    """Raised when no running container can be resolved for a service."""


class OrchestrationEngine(ABC):
    @abstractmethod
    def run(self, args: Sequence[str], env: Mapping[str, str]) -> None:
        """Run a compose command with the stack's manifests, blocking until it exits."""

    @abstractmethod
    def remove_volume(self, name: str, env: Mapping[str, str]) -> bool:
        """Delete a named volume; return False instead of raising when it fails."""

    @abstractmethod
    def container_name(self, service: str, env: Mapping[str, str] | None = None) -> str:
        """Return the name of the running container backing ``service``.

        ``env`` is the environment the stack was started with, so manifest
        interpolation matches the main call.
        """

    @abstractmethod
    def describe(self, args: Sequence[str]) -> str:
        """Return the printable command line for ``args``."""


__all__ = ["ContainerLookupError", "OrchestrationEngine", "OrchestrationError"]
