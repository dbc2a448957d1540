"""Detects repository files owned by another user (e.g. root-owned build output)."""

from __future__ import annotations

import getpass
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List


class OwnershipError(RuntimeError):
    pass


@dataclass(frozen=True)
class OwnershipReport:
    user: str
    foreign: List[Path]

    @property
    def clean(self) -> bool:
        return not self.foreign


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return str(os.getuid())


def find_foreign_owned(root: Path, uid: int, *, limit: int = 20) -> List[Path]:
    """Return up to ``limit`` paths below ``root`` whose owner is not ``uid``."""

    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        for name in [*dirnames, *filenames]:
            path = Path(dirpath) / name
            try:
                owner = path.lstat().st_uid
            except OSError:
                continue
            if owner != uid:
                found.append(path)
                if len(found) >= limit:
                    return found
    return found


def check_ownership(
    root: Path,
    *,
    uid_provider: Callable[[], int] | None = None,
    user_provider: Callable[[], str] = _current_user,
) -> OwnershipReport:
    if uid_provider is None:
        if not hasattr(os, "getuid"):
            return OwnershipReport(user=user_provider(), foreign=[])
        uid_provider = os.getuid
    return OwnershipReport(user=user_provider(), foreign=find_foreign_owned(root, uid_provider()))


def remediation_text(user: str) -> str:
    return (
        f"Files not owned by your current user: {user} found in this repo.\n"
        "This will cause file permission errors when the dev containers start up.\n\n"
        "They are probably build files created by older Docker images owned by root.\n"
        "Run the following command to show which files are causing this:\n"
        f"  find . ! -user {user}\n\n"
        "Please run the following command to fix file permissions in this repository:\n"
        f"  sudo chown {user} -R .\n\n"
        "OR you can ignore this check by running with the ignore_ownership arg:\n"
        "  devcall ignore_ownership ..."
    )


__all__ = ["OwnershipError", "OwnershipReport", "check_ownership", "find_foreign_owned", "remediation_text"]
