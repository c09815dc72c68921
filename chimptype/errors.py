from __future__ import annotations

from typing import Optional


class ChimpTypeError(Exception):
    """Base class for every error raised by chimptype."""


class InputDecodeError(ChimpTypeError):
    """Raw terminal input could not be mapped to a key event."""

    def __init__(self, key: str, character: Optional[str] = None) -> None:
        super().__init__(f"cannot decode key {key!r}")
        self.key = key
        self.character = character


class InvalidOperation(ChimpTypeError):
    """A key event was applied where the session cannot accept it."""


class WordSourceError(ChimpTypeError):
    """A word file is missing or malformed."""
