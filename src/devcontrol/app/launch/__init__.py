"""Launch pipeline services."""

from .attacher import AttachResult, ContainerAttacher
from .ownership import OwnershipError, OwnershipReport, check_ownership
from .service import LaunchOutcome, LaunchService
from .sessions import TerminalSessionOrchestrator

__all__ = [
    "AttachResult",
    "ContainerAttacher",
    "LaunchOutcome",
    "LaunchService",
    "OwnershipError",
    "OwnershipReport",
    "TerminalSessionOrchestrator",
    "check_ownership",
]
