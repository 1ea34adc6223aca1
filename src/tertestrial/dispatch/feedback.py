from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape

from tertestrial.config.paths import CLEAR_SCREEN
from tertestrial.errors import TertestrialError

SGR_RESET = "\x1b[0m"


class Feedback:
    """Status lines for the person watching the terminal."""

    def __init__(self, console: Optional[Console] = None, clear_screen: bool = CLEAR_SCREEN) -> None:
        self.console = console or Console()
        self.clear_screen = clear_screen

    def reset(self) -> None:
        # Leftover colors from the previous test run would bleed into ours.
        if not self.console.is_terminal:
            return
        self.console.file.write(SGR_RESET)
        if self.clear_screen:
            self.console.clear()

    def command(self, command: str) -> None:
        self.console.print(escape(command), style="bold")

    def switched(self, name: str, index: int) -> None:
        self.console.print(f"Activating action set [bold]{escape(name)}[/bold] ({index})")

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def error(self, err: TertestrialError) -> None:
        self.console.print(f"Error: {escape(err.message)}", style="bold red")
        if err.guidance:
            self.console.print(escape(err.guidance), style="red")
