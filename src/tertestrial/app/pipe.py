from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Iterator, Optional, Union

from tertestrial.dispatch.dispatcher import DispatchResult, Dispatcher
from tertestrial.errors import RequestError, TertestrialError


class Pipe:
    """The named pipe the editor plugin writes requests into, one JSON object per line."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def create(self) -> None:
        os.mkfifo(self.path, 0o700)

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)

    def exists(self) -> bool:
        return self.path.exists()

    def lines(self) -> Iterator[bytes]:
        # Opening blocks until a writer shows up; EOF means the writer closed, so reopen.
        # Raw bytes: decoding happens per line so one bad byte only costs that request.
        while True:
            with self.path.open("rb") as fh:
                for line in fh:
                    yield line


def handle_line(dispatcher: Dispatcher, line: Union[bytes, str]) -> Optional[DispatchResult]:
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            return dispatcher.report_error(RequestError(f"cannot decode request {line!r}: {exc}"))
    text = line.strip()
    if not text:
        return None
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        return dispatcher.report_error(RequestError(f"cannot parse request {text!r}: {exc}"))
    return dispatcher.handle_payload(payload)


def listen(pipe: Pipe, dispatcher: Dispatcher) -> None:
    """Serve requests from the pipe until Ctrl-C, then remove the pipe."""
    if pipe.exists():
        raise TertestrialError(
            f"{pipe.path} already exists",
            "Is Tertestrial already running in this directory? If not, delete the file and try again.",
        )
    pipe.create()
    dispatcher.feedback.info(f"Tertestrial is listening on {pipe.path}")
    try:
        for line in pipe.lines():
            handle_line(dispatcher, line)
    except KeyboardInterrupt:
        dispatcher.feedback.info("\nSee you later!")
    finally:
        pipe.delete()
