"""Terminal chat CLI that keeps each conversation as a markdown file.

On start you pick an existing conversation from the ``chats`` directory or
start a new one. Messages may span several lines; send one by entering a
line that holds a single space. Type ``exit`` (and send it) to quit.
"""
from __future__ import annotations

import logging
import sys
import readline  # noqa: F401 – side-effect: history & line editing
from typing import List, Optional

from openai import OpenAI  # type: ignore
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt

from .config import Settings
from .core import ChatDocument, ChatStore, DocumentError, Role
from .core.client import CompletionError, OpenAIClientWrapper
from .utils import (
    Ansi,
    RULE,
    USER_LABEL,
    console,
)

logger = logging.getLogger(__name__)

SEND_MARKER = " "
EXIT_COMMAND = "exit"


def pick_document(store: ChatStore) -> Optional[str]:
    """Ask which conversation to continue; ``None`` means a new one."""
    names = store.list_documents()

    console.print(Ansi.heading("Select a chat:"))
    console.print(Ansi.menu_item(0, "New chat", new=True))
    for idx, name in enumerate(names, start=1):
        console.print(Ansi.menu_item(idx, name))

    choice = IntPrompt.ask(
        "Enter a number",
        console=console,
        choices=[str(i) for i in range(len(names) + 1)],
        show_choices=False,
    )
    if choice == 0:
        return None
    return names[choice - 1]


class ChatCLI:
    """High-level orchestration class for the interactive REPL."""

    def __init__(self, document: ChatDocument, client_wrapper: OpenAIClientWrapper, model: str):
        self.document = document
        self.client = client_wrapper
        self.model = model

    def read_message(self) -> Optional[str]:
        """Collect lines until a line holding a single space.

        Returns ``None`` when input ends before anything was typed.
        """
        lines: List[str] = []
        console.print(RULE)
        console.print(Ansi.hint("Enter your message (send with a line containing one space):"))
        while True:
            try:
                line = console.input(f"{USER_LABEL}> ")
            except EOFError:
                if not lines:
                    return None
                break
            if line == SEND_MARKER:
                break
            lines.append(line)
        console.print(RULE)
        return "\n".join(lines)

    def repl(self) -> None:
        """Run the interactive read–eval–print-loop."""
        console.print(Panel.fit(f"chatmd – {escape(self.document.name)}", style="bold magenta"))

        console.print(
            Ansi.hint(f"Current model: {self.model}."),
            Ansi.hint("Send a message with a line containing a single space."),
            Ansi.hint(f"Type '{EXIT_COMMAND}' and send it to quit."),
            sep="\n",
        )

        try:
            while True:
                message = self.read_message()
                if message is None:
                    console.print("\n(end of input – exiting)")
                    break
                if message == "":
                    continue
                if message == EXIT_COMMAND:
                    console.print("Bye!")
                    break

                # Record the question before asking so it is never lost
                self.document.append(Role.USER, message)

                try:
                    reply = self.client.complete(self.model, self.document.turns)
                except CompletionError as exc:
                    logger.warning("completion failed: %s", exc)
                    console.print(f"\n{Ansi.error(str(exc))}\n")
                    continue

                self.document.append(reply.role, reply.content)
        except KeyboardInterrupt:
            console.print("\n(signal caught – exiting)")


# ---------------------------------------------------------------------------
# Entrypoint helpers
# ---------------------------------------------------------------------------

def _configure_logging(level: int) -> None:  # pragma: no cover
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _abort(message: str) -> None:
    console.print(Ansi.error(message))
    sys.exit(1)


def run_cli() -> None:
    settings = Settings.from_env()
    _configure_logging(settings.log_level_number)

    if not settings.api_key:
        _abort(
            "OPENAI_API_KEY environment variable is not set. "
            "(Tried reading from environment and ~/.zshrc)"
        )

    store = ChatStore(settings.chats_dir)
    try:
        store.ensure()
    except OSError as exc:
        _abort(f"Error creating chats directory: {exc}")

    try:
        selection = pick_document(store)
    except OSError as exc:
        _abort(f"Error listing chats: {exc}")
    except (EOFError, KeyboardInterrupt):
        console.print()
        return

    try:
        if selection is None:
            document = store.create()
            console.print(f"Created new chat file '{escape(document.name)}'")
        else:
            document = store.open(selection)
            console.print(f"Loaded chat file '{escape(document.name)}' ({len(document.turns)} messages)")
    except (OSError, DocumentError) as exc:
        _abort(f"Error opening chat file: {exc}")

    client = OpenAI(**settings.client_kwargs())  # type: ignore[arg-type]
    wrapper = OpenAIClientWrapper(client)

    with document:
        ChatCLI(document, wrapper, settings.model).repl()


if __name__ == "__main__":  # pragma: no cover
    run_cli()
