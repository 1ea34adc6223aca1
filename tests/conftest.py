from __future__ import annotations

import io
from typing import List

import pytest
from rich.console import Console

from tertestrial.dispatch.feedback import Feedback
from tertestrial.dispatch.launcher import Launcher


class RecordingLauncher(Launcher):
    def __init__(self) -> None:
        self.launched: List[str] = []

    def launch(self, command: str) -> None:
        self.launched.append(command)


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def feedback(console: Console) -> Feedback:
    return Feedback(console, clear_screen=False)
