"""Console output for the chat session, styled with :mod:`rich` markup."""

import os

from rich.console import Console
from rich.markup import escape


console = Console()

RULE = "---------"


class Ansi:
    """Style names and the few markup snippets the session prints."""

    BOLD = "bold"

    FG_GREEN = "green"
    FG_CYAN = "cyan"
    FG_MAGENTA = "magenta"
    FG_YELLOW = "yellow"
    FG_RED = "red"

    @staticmethod
    def style(text: str, *codes: str) -> str:
        """Return *text* wrapped in rich markup unless ``NO_COLOR`` is set."""
        if os.getenv("NO_COLOR") is not None:
            return text
        return f"[{' '.join(codes)}]{text}[/]"

    @classmethod
    def heading(cls, text: str) -> str:
        return cls.style(text, cls.BOLD, cls.FG_MAGENTA)

    @classmethod
    def hint(cls, text: str) -> str:
        return cls.style(text, cls.FG_YELLOW)

    @classmethod
    def menu_item(cls, number: int, label: str, *, new: bool = False) -> str:
        """One numbered line of the chat picker; *label* is shown literally."""
        colour = cls.FG_GREEN if new else cls.FG_CYAN
        return f"  [{number}] {cls.style(escape(label), colour)}"

    @classmethod
    def error(cls, message: str) -> str:
        return f"{ERROR_LABEL}: {escape(message)}"


USER_LABEL = Ansi.style("you", Ansi.FG_CYAN, Ansi.BOLD)
ASSISTANT_LABEL = Ansi.style("assistant", Ansi.FG_GREEN, Ansi.BOLD)
ERROR_LABEL = Ansi.style("error", Ansi.FG_RED, Ansi.BOLD)
