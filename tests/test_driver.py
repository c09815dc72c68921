"""Tests for chimptype.driver: the Welcome/Running/Complete/Exit phases."""

from __future__ import annotations

import pytest

from chimptype.driver import Phase, SessionDriver
from chimptype.errors import InputDecodeError, InvalidOperation
from chimptype.keys import BACKSPACE, ENTER, ESCAPE, SPACE, char
from chimptype.words import StaticWordSource


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def press(driver, text):
    for c in text:
        driver.handle_key(SPACE if c == " " else BACKSPACE if c == "<" else char(c))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def driver(clock):
    return SessionDriver(StaticWordSource(["dog", "cat"]), clock=clock)


class TestWelcome:
    def test_starts_on_welcome(self, driver):
        assert driver.phase is Phase.WELCOME
        assert driver.session is None

    def test_enter_starts_test(self, driver):
        assert driver.handle_key(ENTER) is Phase.RUNNING
        assert driver.session is not None
        assert driver.session.target_words() == ["dog", "cat"]

    @pytest.mark.parametrize("key", [ESCAPE, char("q"), char("Q")])
    def test_exit_keys(self, driver, key):
        assert driver.handle_key(key) is Phase.EXIT

    def test_other_keys_ignored(self, driver):
        for key in (char("x"), SPACE, BACKSPACE):
            assert driver.handle_key(key) is Phase.WELCOME

    def test_decode_error_ignored(self, driver):
        assert driver.handle_decode_error(InputDecodeError("up")) is Phase.WELCOME


class TestRunning:
    def test_full_run(self, driver, clock):
        driver.handle_key(ENTER)
        press(driver, "do")
        clock.now += 3.0
        press(driver, "g ca")
        clock.now += 3.0
        press(driver, "t")
        assert driver.phase is Phase.RUNNING

        press(driver, " ")
        assert driver.phase is Phase.COMPLETE
        assert driver.session is None
        assert driver.result is not None
        assert driver.result.duration_sec == pytest.approx(6.0)
        assert driver.result.words_correct == 2

    def test_clock_starts_at_first_key(self, driver, clock):
        driver.handle_key(ENTER)
        clock.now += 50.0
        assert driver.elapsed() == 0.0
        press(driver, "d")
        clock.now += 2.0
        assert driver.elapsed() == pytest.approx(2.0)

    def test_enter_not_forwarded(self, driver):
        driver.handle_key(ENTER)
        press(driver, "do")
        assert driver.handle_key(ENTER) is Phase.RUNNING
        assert driver.session.typed_text_segments() == ["do"]

    def test_escape_abandons(self, driver):
        driver.handle_key(ENTER)
        press(driver, "dog c")
        assert driver.handle_key(ESCAPE) is Phase.WELCOME
        assert driver.session is None
        assert driver.result is None
        assert driver.notice == "Test abandoned"

    def test_decode_error_ends_session(self, driver, caplog):
        driver.handle_key(ENTER)
        press(driver, "do")
        with caplog.at_level("ERROR", logger="chimptype.driver"):
            assert driver.handle_decode_error(InputDecodeError("up")) is Phase.WELCOME
        assert driver.session is None
        assert "aborting session" in caplog.text
        assert "'up'" in driver.notice

    def test_live_wpm_reads_only(self, driver, clock):
        driver.handle_key(ENTER)
        press(driver, "dog c")
        clock.now += 6.0
        before = list(driver.session.typed)
        assert driver.live_wpm() == pytest.approx((5 / 5.0) / 0.1)
        assert driver.session.typed == before

    def test_new_test_clears_notice(self, driver):
        driver.handle_key(ENTER)
        driver.handle_key(ESCAPE)
        driver.handle_key(ENTER)
        assert driver.notice == ""
        assert driver.phase is Phase.RUNNING

    def test_running_without_session_rejected(self, driver):
        driver.phase = Phase.RUNNING
        with pytest.raises(InvalidOperation):
            driver.handle_key(char("a"))


class TestComplete:
    def finish(self, driver):
        driver.handle_key(ENTER)
        press(driver, "dog cat ")
        assert driver.phase is Phase.COMPLETE

    def test_any_key_returns_to_welcome(self, driver):
        self.finish(driver)
        assert driver.handle_key(char("z")) is Phase.WELCOME

    def test_undecodable_key_returns_to_welcome(self, driver):
        self.finish(driver)
        assert driver.handle_decode_error(InputDecodeError("f5")) is Phase.WELCOME

    def test_escape_does_not_exit_from_complete(self, driver):
        self.finish(driver)
        assert driver.handle_key(ESCAPE) is Phase.WELCOME
        assert driver.handle_key(ESCAPE) is Phase.EXIT
