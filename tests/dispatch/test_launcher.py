from __future__ import annotations

import subprocess
from typing import Any, List

from rich.console import Console

from tertestrial.dispatch.launcher import DryRunLauncher, ShellLauncher


def test_shell_launcher_spawns_sh_without_waiting(monkeypatch) -> None:
    spawned: List[Any] = []

    class FakePopen:
        def __init__(self, args: Any, **kwargs: Any) -> None:
            spawned.append((args, kwargs))

        def wait(self) -> int:  # pragma: no cover - must never be called
            raise AssertionError("launcher must not wait")

    monkeypatch.setattr(subprocess, "Popen", FakePopen)

    ShellLauncher().launch("mocha a.spec.js")

    # no stream redirection: the command writes straight to our terminal
    assert spawned == [(["sh", "-c", "mocha a.spec.js"], {})]


def test_dry_run_launcher_only_prints(console: Console) -> None:
    launcher = DryRunLauncher(console)

    launcher.launch("rm -rf [build]")

    assert launcher.launched == ["rm -rf [build]"]
    assert "[DRY-RUN] would run: rm -rf [build]" in console.file.getvalue()
