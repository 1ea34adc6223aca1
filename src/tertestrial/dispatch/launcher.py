from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from typing import List

from rich.console import Console
from rich.markup import escape


class Launcher(ABC):
    @abstractmethod
    def launch(self, command: str) -> None:
        """Start one shell command, streaming its output. Must not wait for it."""
        ...


class ShellLauncher(Launcher):
    """
    Runs commands through `sh -c` with stdin/stdout/stderr inherited.

    Fire-and-forget: the process is not tracked, timed out or cancelled.
    Two requests in quick succession give two processes whose output
    interleaves in the terminal.
    """

    def __init__(self, shell: str = "sh") -> None:
        self.shell = shell

    def launch(self, command: str) -> None:
        subprocess.Popen([self.shell, "-c", command])


class DryRunLauncher(Launcher):
    def __init__(self, console: Console) -> None:
        self.console = console
        self.launched: List[str] = []

    def launch(self, command: str) -> None:
        self.launched.append(command)
        self.console.print(escape(f"[DRY-RUN] would run: {command}"), style="dim")
