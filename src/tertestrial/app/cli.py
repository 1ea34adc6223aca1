from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tertestrial.config.loader import create_example, load_configuration
from tertestrial.config.paths import CONFIG_PATH, HTTP_HOST, HTTP_PORT, PIPE_PATH
from tertestrial.errors import TertestrialError
from tertestrial.rules.core import Configuration


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tertestrial",
        description="Runs the test command matching what your editor asks for.",
    )
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="configuration file")
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="listen for requests (default)")
    run.add_argument("--listener", choices=["pipe", "http"], default="pipe")
    run.add_argument("--pipe", type=Path, default=PIPE_PATH, help="named pipe to read requests from")
    run.add_argument("--host", default=HTTP_HOST)
    run.add_argument("--port", type=int, default=HTTP_PORT)
    run.add_argument("--dry-run", action="store_true", help="print commands instead of running them")

    sub.add_parser("setup", help="create an example configuration file")
    sub.add_parser("actions", help="show the configured action sets")
    return parser


def actions_table(configuration: Configuration) -> Table:
    table = Table(title="Action sets")
    table.add_column("#", justify="right")
    table.add_column("ACTION SET")
    table.add_column("MATCH")
    table.add_column("RUN")
    for index, action_set in enumerate(configuration.action_sets, start=1):
        for rule in action_set.rules:
            match = json.dumps(dict(rule.match)) if rule.match else "(catch-all)"
            table.add_row(str(index), escape(action_set.name), escape(match), escape(rule.template))
    return table


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    command = args.command or "run"

    try:
        if command == "setup":
            create_example(args.config)
            console.print(f"Created {escape(str(args.config))}")
        elif command == "actions":
            console.print(actions_table(load_configuration(args.config)))
        else:
            # Imported lazily; "setup" and "actions" should not pull in the server stack.
            from tertestrial.app.run import run_http, run_pipe

            listener = getattr(args, "listener", "pipe")
            dry_run = getattr(args, "dry_run", False)
            if listener == "http":
                run_http(args.config, args.host, args.port, dry_run=dry_run)
            else:
                run_pipe(args.config, getattr(args, "pipe", PIPE_PATH), dry_run=dry_run)
    except TertestrialError as exc:
        console.print(f"Error: {escape(exc.message)}", style="bold red")
        if exc.guidance:
            console.print(escape(exc.guidance), style="red")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
