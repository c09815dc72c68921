from __future__ import annotations

import logging
from enum import Enum
from typing import List, Sequence

from .errors import InvalidOperation
from .keys import BACKSPACE, KeyEvent, KeyKind, SPACE, Word, text_of, word_from_text

log = logging.getLogger("chimptype.session")


class Outcome(Enum):
    TYPED = "typed"
    ADVANCED = "advanced"
    FINISHED = "finished"
    ERASED = "erased"
    IGNORED = "ignored"
    ABANDONED = "abandoned"


class TypingSession:
    """
    Progress through one word list.

    The session only logs what was typed. Whether a character is right or
    wrong is worked out by the renderer from (word, typed segment) on demand.
    """

    def __init__(self, word_list: Sequence[str]) -> None:
        if not word_list:
            raise ValueError("a session needs at least one word")
        self.word_list: List[Word] = [word_from_text(w) for w in word_list]
        self.word_index = 0
        self.typed: List[KeyEvent] = []
        # every state-changing key, backspaces included
        self.history: List[KeyEvent] = []
        self.finished = False

    def apply(self, event: KeyEvent) -> Outcome:
        if self.finished:
            raise InvalidOperation(f"session already finished, cannot apply {event}")
        kind = event.kind
        if kind is KeyKind.CHARACTER:
            self.typed.append(event)
            outcome = Outcome.TYPED
        elif kind is KeyKind.SPACE:
            outcome = self._handle_space()
        elif kind is KeyKind.BACKSPACE:
            outcome = self._handle_backspace()
        elif kind is KeyKind.ESCAPE:
            log.debug("session abandoned at word %d", self.word_index)
            return Outcome.ABANDONED
        elif kind is KeyKind.ENTER:
            raise InvalidOperation("enter is not accepted inside a session")
        else:
            raise InvalidOperation(f"unknown key kind {kind!r}")
        if outcome is not Outcome.IGNORED:
            self.history.append(event)
        return outcome

    def _handle_space(self) -> Outcome:
        self.typed.append(SPACE)
        if self.word_index == len(self.word_list) - 1:
            self.finished = True
            log.debug("session finished after %d keys", len(self.history) + 1)
            return Outcome.FINISHED
        self.word_index += 1
        return Outcome.ADVANCED

    def _handle_backspace(self) -> Outcome:
        # nothing to erase before the first keystroke
        if self.word_index == 0 and not self.typed:
            return Outcome.IGNORED
        if self.char_index_within_current_word() == 0:
            # the entry about to be popped is the space that committed the previous word
            self.word_index -= 1
        self.typed.pop()
        return Outcome.ERASED

    # ---------------------------
    # Queries
    # ---------------------------

    def is_finished(self) -> bool:
        return self.finished

    def current_word_index(self) -> int:
        return self.word_index

    def current_word(self) -> Word:
        return self.word_list[self.word_index]

    def char_index_within_current_word(self) -> int:
        count = 0
        for key in reversed(self.typed):
            if key == SPACE:
                break
            count += 1
        return count

    def typed_word_segments(self) -> List[List[KeyEvent]]:
        segments: List[List[KeyEvent]] = [[]]
        for key in self.typed:
            if key == SPACE:
                segments.append([])
            else:
                segments[-1].append(key)
        # the final space of a finished session opens no new word
        if self.finished and len(segments) > len(self.word_list):
            segments.pop()
        return segments

    def typed_text_segments(self) -> List[str]:
        return [text_of(segment) for segment in self.typed_word_segments()]

    def target_words(self) -> List[str]:
        return [text_of(word) for word in self.word_list]

    def backspace_count(self) -> int:
        return sum(1 for key in self.history if key == BACKSPACE)

    def __repr__(self) -> str:
        return (
            f"TypingSession(words={len(self.word_list)}, word_index={self.word_index}, "
            f"typed={text_of(self.typed)!r}, finished={self.finished})"
        )
