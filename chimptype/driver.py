from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from .errors import InputDecodeError, InvalidOperation
from .keys import ENTER, ESCAPE, KeyEvent, KeyKind, char
from .results import TestResult, compute_wpm
from .session import Outcome, TypingSession

log = logging.getLogger("chimptype.driver")

WordSource = Callable[[], List[str]]

QUIT_KEYS = (ESCAPE, char("q"), char("Q"))


class Phase(Enum):
    WELCOME = "welcome"
    RUNNING = "running"
    COMPLETE = "complete"
    EXIT = "exit"


class SessionDriver:
    """
    Welcome -> Running -> Complete -> Welcome, and Welcome -> Exit.

    Owns the one live TypingSession and times it from the first key to the
    finishing space.
    """

    def __init__(self, word_source: WordSource, clock: Callable[[], float] = time.monotonic) -> None:
        self.word_source = word_source
        self.clock = clock
        self.phase = Phase.WELCOME
        self.session: Optional[TypingSession] = None
        self.result: Optional[TestResult] = None
        self.notice = ""
        self.started_at: Optional[float] = None

    def handle_key(self, key: KeyEvent) -> Phase:
        if self.phase is Phase.WELCOME:
            self._handle_welcome(key)
        elif self.phase is Phase.RUNNING:
            self._handle_running(key)
        elif self.phase is Phase.COMPLETE:
            self.phase = Phase.WELCOME
        return self.phase

    def handle_decode_error(self, error: InputDecodeError) -> Phase:
        if self.phase is Phase.RUNNING:
            log.error("aborting session: %s", error)
            self._discard(f"Test aborted: unsupported key {error.key!r}")
        elif self.phase is Phase.COMPLETE:
            self.phase = Phase.WELCOME
        else:
            log.debug("ignoring %s on %s screen", error, self.phase.value)
        return self.phase

    def _handle_welcome(self, key: KeyEvent) -> None:
        if key == ENTER:
            self.start()
        elif key in QUIT_KEYS:
            self.phase = Phase.EXIT

    def start(self) -> None:
        words = self.word_source()
        self.session = TypingSession(words)
        self.result = None
        self.notice = ""
        self.started_at = None
        self.phase = Phase.RUNNING
        log.info("starting test with %d words", len(words))

    def _handle_running(self, key: KeyEvent) -> None:
        if self.session is None:
            raise InvalidOperation("running phase without a session")
        if key.kind is KeyKind.ENTER:
            log.debug("enter ignored while running")
            return
        if self.started_at is None and key.kind is not KeyKind.ESCAPE:
            self.started_at = self.clock()
        outcome = self.session.apply(key)
        if outcome is Outcome.ABANDONED:
            self._discard("Test abandoned")
        elif outcome is Outcome.FINISHED:
            self.result = TestResult.from_session(self.session, self.elapsed())
            self.session = None
            self.phase = Phase.COMPLETE
            log.info(
                "test complete: %.1f wpm, %.1f%% accuracy",
                self.result.wpm,
                self.result.accuracy,
            )

    def _discard(self, notice: str) -> None:
        self.session = None
        self.started_at = None
        self.notice = notice
        self.phase = Phase.WELCOME

    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        return max(0.0, self.clock() - self.started_at)

    def live_wpm(self) -> float:
        """Gross WPM of the running test so far; reads the session, never changes it."""
        if self.session is None:
            return 0.0
        return compute_wpm(len(self.session.typed), self.elapsed())
