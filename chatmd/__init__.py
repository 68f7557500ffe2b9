"""Interactive CLI for chatting with OpenAI models, one markdown file per chat.

Features
--------
1. Every conversation is appended to ``chats/chat_YYYYMMDD_HHMMSS.md`` as it happens.
2. Any earlier conversation can be picked from a menu and resumed; its markdown is
   parsed back into the message history sent to the model.

Run `python -m chatmd` or the `chatmd` console script.
"""
# Re-export useful symbols for convenience
from .core import (
    ChatDocument,
    ChatStore,
    DocumentError,
    Role,
    Turn,
    decode_document,
    encode_turn,
    load_conversation,
)
from .core.client import CompletionError, OpenAIClientWrapper
from .cli import ChatCLI, pick_document, run_cli

__all__ = [
    "ChatDocument",
    "ChatStore",
    "DocumentError",
    "Role",
    "Turn",
    "decode_document",
    "encode_turn",
    "load_conversation",
    "CompletionError",
    "OpenAIClientWrapper",
    "ChatCLI",
    "pick_document",
    "run_cli",
]
