from .ansi import (
    Ansi,
    RULE,
    USER_LABEL,
    ASSISTANT_LABEL,
    ERROR_LABEL,
    console,
)
from .spinner import Spinner

__all__ = [
    "Ansi",
    "RULE",
    "USER_LABEL",
    "ASSISTANT_LABEL",
    "ERROR_LABEL",
    "console",
    "Spinner",
]
