"""Terminal typing-speed test built on Textual."""

from .errors import ChimpTypeError, InputDecodeError, InvalidOperation, WordSourceError
from .keys import BACKSPACE, ENTER, ESCAPE, SPACE, KeyEvent, KeyKind, char, decode_key
from .session import Outcome, TypingSession

__version__ = "0.1.0"

__all__ = [
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "SPACE",
    "ChimpTypeError",
    "InputDecodeError",
    "InvalidOperation",
    "KeyEvent",
    "KeyKind",
    "Outcome",
    "TypingSession",
    "WordSourceError",
    "char",
    "decode_key",
]
