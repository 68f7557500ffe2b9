"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_MODEL = "o1"
DEFAULT_CHATS_DIR = "chats"

_ZSHRC_KEY_PATTERN = re.compile(r"(?:export\s+)?OPENAI_API_KEY\s*=\s*['\"]?([^'\"\n]+)['\"]?")


def _api_key_from_zshrc(path: Optional[Path] = None) -> Optional[str]:
    """Look for an ``OPENAI_API_KEY`` assignment in ``~/.zshrc``."""
    zshrc_path = path or Path.home() / ".zshrc"
    if not zshrc_path.exists():
        return None
    match = _ZSHRC_KEY_PATTERN.search(zshrc_path.read_text())
    return match.group(1).strip() if match else None


@dataclass
class Settings:
    api_key: Optional[str]
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    chats_dir: Path = Path(DEFAULT_CHATS_DIR)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``OPENAI_*`` and ``CHATMD_*`` variables.

        Falls back to ``~/.zshrc`` for the API key (convenience for macOS users).
        """
        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or _api_key_from_zshrc(),
            base_url=os.getenv("OPENAI_BASE_URL") or None,
            model=os.getenv("CHATMD_MODEL", DEFAULT_MODEL),
            chats_dir=Path(os.getenv("CHATMD_CHATS_DIR", DEFAULT_CHATS_DIR)),
            log_level=os.getenv("CHATMD_LOG_LEVEL", "WARNING").upper(),
        )

    @property
    def log_level_number(self) -> int:
        """Numeric level for ``log_level``; unknown names fall back to WARNING."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING

    def client_kwargs(self) -> Dict[str, Any]:
        client_kwargs: Dict[str, Any] = {"api_key": self.api_key}
        if self.base_url:
            client_kwargs["base_url"] = self.base_url
        return client_kwargs
