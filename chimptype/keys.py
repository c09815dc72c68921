from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .errors import InputDecodeError


class KeyKind(Enum):
    CHARACTER = "character"
    SPACE = "space"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"


@dataclass(frozen=True)
class KeyEvent:
    """One decoded unit of user input."""

    kind: KeyKind
    char: str = ""

    def __post_init__(self) -> None:
        if self.kind is KeyKind.CHARACTER:
            if len(self.char) != 1 or self.char.isspace() or not self.char.isprintable():
                raise ValueError(f"not a printable character: {self.char!r}")
        elif self.char:
            raise ValueError(f"{self.kind.value} key carries no character")

    def __str__(self) -> str:
        if self.kind is KeyKind.CHARACTER:
            return self.char
        if self.kind is KeyKind.SPACE:
            return " "
        return f"<{self.kind.value}>"


def char(c: str) -> KeyEvent:
    return KeyEvent(KeyKind.CHARACTER, c)


SPACE = KeyEvent(KeyKind.SPACE)
BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
ENTER = KeyEvent(KeyKind.ENTER)
ESCAPE = KeyEvent(KeyKind.ESCAPE)

Word = Tuple[KeyEvent, ...]


def word_from_text(text: str) -> Word:
    """Turn a target word into its sequence of Character events."""
    if not text:
        raise ValueError("words must not be empty")
    if any(c.isspace() for c in text):
        raise ValueError(f"words must not contain whitespace: {text!r}")
    return tuple(char(c) for c in text)


def text_of(keys) -> str:
    return "".join(str(k) for k in keys)


# ---------------------------
# Terminal decoding
# ---------------------------

# Textual key names. Some terminals send ctrl+h for backspace.
NAMED_KEYS: Dict[str, KeyEvent] = {
    "space": SPACE,
    "backspace": BACKSPACE,
    "ctrl+h": BACKSPACE,
    "enter": ENTER,
    "escape": ESCAPE,
}


def decode_key(key: str, character: Optional[str] = None) -> KeyEvent:
    """
    Map a Textual key (its name and the character it produced) onto a KeyEvent.
    Raises InputDecodeError for anything else (arrows, function keys, ctrl combos).
    """
    named = NAMED_KEYS.get(key)
    if named is not None:
        return named
    if character is not None and len(character) == 1:
        if character == " ":
            return SPACE
        if character.isprintable() and not character.isspace():
            return char(character)
    raise InputDecodeError(key, character)
