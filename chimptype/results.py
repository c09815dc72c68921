from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .session import TypingSession


def char_match_count(typed: str, target: str) -> int:
    return sum(1 for a, b in zip(typed, target) if a == b)


def compute_wpm(chars: int, elapsed_sec: float) -> float:
    if elapsed_sec <= 0:
        return 0.0
    minutes = elapsed_sec / 60.0
    return (chars / 5.0) / minutes


def format_duration(seconds: float) -> str:
    seconds = max(0.0, seconds)
    minutes = int(seconds) // 60
    return f"{minutes:02d}:{seconds - minutes * 60:04.1f}"


@dataclass
class WordResult:
    expected: str
    typed: str

    @property
    def correct(self) -> int:
        return char_match_count(self.typed, self.expected)

    @property
    def incorrect(self) -> int:
        return max(len(self.typed), len(self.expected)) - self.correct

    @property
    def is_correct(self) -> bool:
        return self.typed == self.expected


@dataclass
class TestResult:
    duration_sec: float
    words: List[WordResult] = field(default_factory=list)
    keystrokes: int = 0
    corrections: int = 0

    # keep pytest from collecting this as a test class
    __test__ = False

    @classmethod
    def from_session(cls, session: TypingSession, duration_sec: float) -> "TestResult":
        typed = session.typed_text_segments()
        words = [
            WordResult(expected, typed[i] if i < len(typed) else "")
            for i, expected in enumerate(session.target_words())
        ]
        return cls(
            duration_sec=duration_sec,
            words=words,
            keystrokes=len(session.history),
            corrections=session.backspace_count(),
        )

    @property
    def typed_chars(self) -> int:
        # each submitted word also cost one space
        return sum(len(w.typed) + 1 for w in self.words)

    @property
    def correct_chars(self) -> int:
        return sum(w.correct + (1 if w.is_correct else 0) for w in self.words)

    @property
    def wpm(self) -> float:
        return compute_wpm(self.typed_chars, self.duration_sec)

    @property
    def cwpm(self) -> float:
        return compute_wpm(self.correct_chars, self.duration_sec)

    @property
    def accuracy(self) -> float:
        total = sum(max(len(w.typed), len(w.expected)) for w in self.words)
        if total == 0:
            return 0.0
        return 100.0 * sum(w.correct for w in self.words) / total

    @property
    def words_correct(self) -> int:
        return sum(1 for w in self.words if w.is_correct)

    @property
    def words_wrong(self) -> int:
        return sum(1 for w in self.words if not w.is_correct)
