r"""Markdown conversation log format.

A conversation is stored as a sequence of blocks, one per turn::

    ## User

    How do I list files?

    ## Assistant

    Use `ls`.

Blocks are only ever appended, so a document written by an earlier session
stays untouched when the conversation is resumed.

Message lines that start with ``## `` are written with a leading backslash
(``\## ...``) so they are not read back as a new turn; markdown headings in
replies therefore show up escaped in the file. Documents from older tools
that already hold a ``\## `` line lose one backslash on that line when read.
Carriage returns in messages are stored as plain newlines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

HEADING_PREFIX = "## "

# Content lines that would otherwise read back as a heading get one extra
# leading backslash on write; exactly one is removed again on read.
_NEEDS_ESCAPE = re.compile(r"^\\*## ")
_ESCAPED = re.compile(r"^\\+## ")
_LINE_BREAK = re.compile(r"\r\n?")


class DocumentError(Exception):
    """A conversation document exists but cannot be decoded as text."""


class Role(str, Enum):
    USER = "User"
    ASSISTANT = "Assistant"

    @classmethod
    def from_label(cls, label: str) -> "Role":
        """Map a heading label to a role; anything unrecognised is a user turn."""
        try:
            return cls(label.strip())
        except ValueError:
            return cls.USER

    @property
    def api_role(self) -> str:
        return self.value.lower()


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str

    def to_message(self) -> Dict[str, str]:
        return {"role": self.role.api_role, "content": self.content}


def _escape(line: str) -> str:
    return "\\" + line if _NEEDS_ESCAPE.match(line) else line


def _unescape(line: str) -> str:
    return line[1:] if _ESCAPED.match(line) else line


def normalize_newlines(text: str) -> str:
    """Turn CRLF and lone CR line breaks into LF, the only break a document keeps."""
    return _LINE_BREAK.sub("\n", text)


def encode_turn(turn: Turn) -> str:
    """Return the block for *turn*, ready to be appended to a document."""
    body = "\n".join(_escape(line) for line in turn.content.split("\n"))
    return f"{HEADING_PREFIX}{turn.role.value}\n\n{body}\n\n"


def _close_block(role: Optional[Role], lines: List[str]) -> Optional[Turn]:
    if role is None:
        return None
    # The blank line right after the heading and the blank gap before the
    # next heading belong to the layout, not to the message.
    if lines and lines[0] == "":
        lines = lines[1:]
    while lines and lines[-1] == "":
        lines = lines[:-1]
    if not lines:
        return None
    return Turn(role, "\n".join(lines))


def decode_document(text: str) -> List[Turn]:
    """Parse a conversation document into its ordered list of turns.

    Never fails on odd structure: text before the first heading is ignored,
    empty blocks are dropped and repeated roles are kept as they are.
    Trailing blank lines of a message do not survive a round trip.
    """
    turns: List[Turn] = []
    role: Optional[Role] = None
    lines: List[str] = []

    for line in text.split("\n"):
        if line.startswith(HEADING_PREFIX):
            turn = _close_block(role, lines)
            if turn is not None:
                turns.append(turn)
            label = line[len(HEADING_PREFIX):].strip()
            role = Role.from_label(label) if label else None
            lines = []
        elif role is not None:
            lines.append(_unescape(line))

    turn = _close_block(role, lines)
    if turn is not None:
        turns.append(turn)
    return turns


def load_conversation(path: Union[str, Path]) -> List[Turn]:
    """Read the document at *path*; a missing file is an empty conversation.

    Other I/O failures propagate; bytes that are not UTF-8 raise
    :class:`DocumentError`.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except UnicodeDecodeError as exc:
        raise DocumentError(f"{path} is not a UTF-8 text document: {exc}") from exc
    return decode_document(text)
