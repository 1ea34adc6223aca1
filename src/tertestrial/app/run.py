from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

import uvicorn
from rich.console import Console

from tertestrial.app.pipe import Pipe, listen
from tertestrial.config.loader import load_configuration
from tertestrial.dispatch.dispatcher import Dispatcher
from tertestrial.dispatch.feedback import Feedback
from tertestrial.dispatch.launcher import DryRunLauncher, Launcher, ShellLauncher


def build_dispatcher(
    config_path: Path,
    *,
    console: Optional[Console] = None,
    dry_run: bool = False,
    report_cb: Optional[Callable[[str, Dict[str, Any]], None]] = None,
) -> Dispatcher:
    console = console or Console()
    configuration = load_configuration(config_path)
    launcher: Launcher = DryRunLauncher(console) if dry_run else ShellLauncher()
    return Dispatcher(
        configuration,
        launcher,
        feedback=Feedback(console),
        report_cb=report_cb,
    )


def run_pipe(config_path: Path, pipe_path: Path, *, dry_run: bool = False) -> None:
    dispatcher = build_dispatcher(config_path, dry_run=dry_run)
    listen(Pipe(pipe_path), dispatcher)


def run_http(config_path: Path, host: str, port: int, *, dry_run: bool = False) -> None:
    # Imported here so the pipe mode does not need the web stack loaded.
    from backend.app.main import create_app
    from backend.app.status import DispatchStatusStore

    status_store = DispatchStatusStore()
    dispatcher = build_dispatcher(config_path, dry_run=dry_run, report_cb=status_store.record)
    app = create_app(dispatcher, status_store)
    dispatcher.feedback.info(f"Tertestrial is listening on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="warning")
