"""Spinner shown while waiting for the first streamed token."""
from __future__ import annotations

from yaspin import yaspin

from .ansi import console


class Spinner:
    """Display a small spinner next to a prefix while work is done.

    Nothing is drawn when the console is not attached to a terminal.
    """

    def __init__(self, prefix: str = ""):
        self._prefix = prefix
        self._started = False
        # spinner after the text so prefix stays at the start
        self._spinner = yaspin(text="", side="right")

    def start(self) -> None:
        if self._started:
            return
        console.print(self._prefix, end="")
        console.file.flush()
        if console.is_terminal:
            self._spinner.start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        if console.is_terminal:
            self._spinner.stop()
            console.print(f"\r{self._prefix}", end="")
        console.file.flush()
        self._started = False
