"""Terminal launchers for the hosts devcall knows how to automate."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable, List

from devcontrol.domain.launch import TerminalSessionRequest
from devcontrol.ports.terminal import TerminalLaunchError, TerminalLauncher

MANUAL_INSTRUCTIONS = "To inspect the now running dev environment open a new tab/terminal and run:"

Which = Callable[[str], "str | None"]


def _applescript_string(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def title_escape(title: str) -> str:
    """Shell snippet that sets the tab title with the in-band OSC 1 sequence."""
    return "printf " + shlex.quote(f"\\e]1;{title}\\a")


def _spawn(command: List[str], *, cwd: Path | None = None) -> None:
    subprocess.Popen(
        command,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class GnomeTerminalLauncher(TerminalLauncher):
    """Opens a new gnome-terminal tab per session."""

    name = "gnome-terminal"

    def __init__(self, working_directory: Path | None = None) -> None:
        self._cwd = working_directory

    def build_command(self, request: TerminalSessionRequest) -> List[str]:
        cwd = self._cwd or Path(os.getcwd())
        return [
            "gnome-terminal",
            "--tab",
            f"--title={request.title}",
            f"--working-directory={cwd}",
            "--",
            "/bin/bash",
            "-c",
            request.command,
        ]

    def open(self, request: TerminalSessionRequest) -> None:
        _spawn(self.build_command(request), cwd=self._cwd)


class AppleTerminalLauncher(TerminalLauncher):
    """Drives Terminal.app through System Events; new tab via cmd-T."""

    name = "apple-terminal"

    def build_command(self, request: TerminalSessionRequest) -> List[str]:
        script = f"{title_escape(request.title)}; {request.command}"
        return [
            "osascript",
            "-e",
            'tell application "Terminal"',
            "-e",
            'tell application "System Events" to keystroke "t" using {command down}',
            "-e",
            f"do script {_applescript_string(script)} in front window",
            "-e",
            "end tell",
        ]

    def open(self, request: TerminalSessionRequest) -> None:
        _spawn(self.build_command(request))


class ManualInstructionsLauncher(TerminalLauncher):
    """Prints the command for the operator; warns once per process run."""

    name = "manual"

    def __init__(self, warning: str) -> None:
        self._warning = warning
        self._warned = False

    @property
    def warned(self) -> bool:
        return self._warned

    def open(self, request: TerminalSessionRequest) -> None:
        if not self._warned:
            print(f"\ndevcall WARNING: {self._warning}", file=sys.stderr)
            self._warned = True
        print(f"\n{MANUAL_INSTRUCTIONS}")
        print(f"    {request.command}")


def unsupported_warning(platform: str) -> str:
    if platform.startswith("linux"):
        return (
            "gnome-terminal is the only currently supported way of opening multiple "
            "tabs/terminals on linux, add support for your setup!"
        )
    return f"The OS '{platform}' is not supported yet for opening terminal tabs, please add support!"


def probe_terminal_launcher(
    *,
    platform: str | None = None,
    which: Which = shutil.which,
    forced: str | None = None,
) -> TerminalLauncher:
    """Pick the terminal launcher for this host. Called once per run."""

    platform = platform or sys.platform
    if forced:
        if forced == GnomeTerminalLauncher.name:
            return GnomeTerminalLauncher()
        if forced == AppleTerminalLauncher.name:
            return AppleTerminalLauncher()
        if forced == ManualInstructionsLauncher.name:
            return ManualInstructionsLauncher("Terminal automation disabled by DEVCONTROL_TERMINAL=manual.")
        return ManualInstructionsLauncher(f"Unknown DEVCONTROL_TERMINAL value '{forced}'.")
    if platform.startswith("linux") and which("gnome-terminal"):
        return GnomeTerminalLauncher()
    if platform == "darwin" and which("osascript"):
        return AppleTerminalLauncher()
    return ManualInstructionsLauncher(unsupported_warning(platform))


__all__ = [
    "AppleTerminalLauncher",
    "GnomeTerminalLauncher",
    "MANUAL_INSTRUCTIONS",
    "ManualInstructionsLauncher",
    "TerminalLaunchError",
    "probe_terminal_launcher",
    "title_escape",
    "unsupported_warning",
]
