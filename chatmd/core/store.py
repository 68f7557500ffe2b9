"""Conversation documents on disk."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import IO, Dict, List, Optional, Union

from .conversation import Role, Turn, encode_turn, load_conversation, normalize_newlines

logger = logging.getLogger(__name__)


class ChatDocument:
    """An open conversation document and the turns it holds.

    The file handle is opened once for appending and kept for the whole
    session. Use it as a context manager so it is closed on every exit path.
    """

    def __init__(self, path: Path, handle: IO[str], turns: Optional[List[Turn]] = None) -> None:
        self.path = path
        self.turns: List[Turn] = turns or []
        self._handle = handle

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def closed(self) -> bool:
        return self._handle.closed

    @property
    def messages(self) -> List[Dict[str, str]]:
        return [turn.to_message() for turn in self.turns]

    def append(self, role: Role, content: str) -> Turn:
        """Write one turn to the end of the document and remember it.

        Line breaks are normalised first so the remembered turn matches what
        a later load of the document returns.
        """
        turn = Turn(role, normalize_newlines(content))
        self._handle.write(encode_turn(turn))
        self._handle.flush()
        self.turns.append(turn)
        logger.debug("appended %s turn to %s", role.value, self.path)
        return turn

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    def __enter__(self) -> "ChatDocument":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class ChatStore:
    """Directory holding one markdown document per conversation."""

    FILENAME_SUFFIX = ".md"

    def __init__(self, root: Union[str, Path] = "chats") -> None:
        self.root = Path(root)

    def ensure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def list_documents(self) -> List[str]:
        return sorted(
            p.name
            for p in self.root.iterdir()
            if p.is_file() and p.suffix == self.FILENAME_SUFFIX
        )

    @classmethod
    def new_document_name(cls, now: Optional[datetime] = None) -> str:
        now = now or datetime.now()
        return f"chat_{now.strftime('%Y%m%d_%H%M%S')}{cls.FILENAME_SUFFIX}"

    def open(self, name: str) -> ChatDocument:
        """Load an existing document and reopen it for appending."""
        path = self.root / name
        turns = load_conversation(path)
        handle = path.open("a", encoding="utf-8")
        logger.info("loaded %d turns from %s", len(turns), path)
        return ChatDocument(path, handle, turns)

    def create(self, now: Optional[datetime] = None) -> ChatDocument:
        """Start a new, empty document named after the current time."""
        name = self.new_document_name(now)
        stem = name[: -len(self.FILENAME_SUFFIX)]
        path = self.root / name
        counter = 1
        while path.exists():
            path = self.root / f"{stem}_{counter}{self.FILENAME_SUFFIX}"
            counter += 1
        handle = path.open("x", encoding="utf-8")
        logger.info("created %s", path)
        return ChatDocument(path, handle)
