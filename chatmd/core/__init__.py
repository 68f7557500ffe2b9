from .conversation import (
    DocumentError,
    Role,
    Turn,
    encode_turn,
    decode_document,
    load_conversation,
    normalize_newlines,
)
from .store import ChatDocument, ChatStore

__all__ = [
    "DocumentError",
    "Role",
    "Turn",
    "encode_turn",
    "decode_document",
    "load_conversation",
    "normalize_newlines",
    "ChatDocument",
    "ChatStore",
]
