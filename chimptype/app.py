from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.message import Message
from textual.widgets import Static

from .config import Settings
from .driver import Phase, SessionDriver, WordSource
from .errors import InputDecodeError
from .keys import decode_key
from .render import Renderer, Viewport
from .results import TestResult, format_duration
from .screen import Canvas, PLAIN, Style
from .words import word_source_from_settings

log = logging.getLogger("chimptype.app")

TITLE_STYLE = Style(bold=True)
MUTED = "#64748b"
HINT = "#93c5fd"


# ---------------------------
# Widgets
# ---------------------------

class StatsBar(Static):
    """Live stats line."""


class HelpBar(Static):
    """Help / controls."""


class TypingBoard(Static, can_focus=True):
    """Word area. Swallows every key and forwards it to the app."""

    class Pressed(Message):
        def __init__(self, key: str, character: Optional[str]) -> None:
            super().__init__()
            self.key = key
            self.character = character

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.post_message(self.Pressed(event.key, event.character))


# ---------------------------
# App
# ---------------------------

class ChimpTypeApp(App):
    CSS = """
    #root {
        height: 100%;
    }

    StatsBar {
        height: 1;
        padding: 0 2;
        background: #0f172a;
    }

    TypingBoard {
        height: 1fr;
        background: #0b1220;
    }

    HelpBar {
        height: 1;
        padding: 0 2;
        background: #0f172a;
    }
    """

    TITLE = "ChimpType"
    SUB_TITLE = "terminal typing test"

    BINDINGS = [
        # priority: the board swallows every other key
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        word_source: Optional[WordSource] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.settings = settings or Settings()
        if word_source is None:
            word_source = word_source_from_settings(self.settings)
        self.driver = SessionDriver(word_source, clock=clock)
        self.renderer = Renderer(padding=self.settings.padding)
        self.canvas: Optional[Canvas] = None

    def compose(self) -> ComposeResult:
        with Container(id="root"):
            self.stats_bar = StatsBar()
            self.board = TypingBoard()
            self.help_bar = HelpBar()
            yield self.stats_bar
            yield self.board
            yield self.help_bar

    def on_mount(self) -> None:
        width, height = self._viewport_size()
        self.canvas = Canvas(width, height, sink=self.board.update)
        self.board.focus()
        self.set_interval(0.5, self._tick)
        self.draw()
        # the board has no size until the first layout pass
        self.call_after_refresh(self.draw)

    def on_resize(self, event: events.Resize) -> None:
        log.debug("terminal resized to %sx%s", event.size.width, event.size.height)
        if self.canvas is not None:
            self.call_after_refresh(self.draw)

    def on_typing_board_pressed(self, message: TypingBoard.Pressed) -> None:
        try:
            key = decode_key(message.key, message.character)
        except InputDecodeError as exc:
            phase = self.driver.handle_decode_error(exc)
        else:
            phase = self.driver.handle_key(key)
        if phase is Phase.EXIT:
            self.exit()
            return
        self.draw()

    def _tick(self) -> None:
        if self.driver.phase is Phase.RUNNING:
            self._render_stats()

    # ---------------------------
    # Drawing
    # ---------------------------

    def _viewport_size(self) -> Tuple[int, int]:
        width, height = self.board.content_size
        if width and height:
            return width, height
        # before layout: whole screen minus the two bars
        return self.size.width, max(1, self.size.height - 2)

    def draw(self) -> None:
        """Clear, lay out and flush one frame for the current phase."""
        if self.canvas is None:
            return
        width, height = self._viewport_size()
        self.canvas.resize(width, height)
        viewport = Viewport(width, height)
        phase = self.driver.phase
        if phase is Phase.RUNNING and self.driver.session is not None:
            self.renderer.draw(self.driver.session, self.canvas, viewport)
        elif phase is Phase.COMPLETE and self.driver.result is not None:
            self._draw_lines(self.canvas, viewport, self._complete_lines(self.driver.result))
        else:
            self._draw_lines(self.canvas, viewport, self._welcome_lines())
        self._render_stats()
        self._render_help()

    def _draw_lines(self, canvas: Canvas, viewport: Viewport, lines: List[Tuple[str, Style]]) -> None:
        left, top = self.renderer.origin(viewport)
        canvas.clear_all()
        for i, (line, style) in enumerate(lines):
            canvas.move_cursor(left, top + i)
            canvas.write(line, style)
        canvas.flush()

    def _welcome_lines(self) -> List[Tuple[str, Style]]:
        lines = [
            ("Welcome to the typing test", TITLE_STYLE),
            ("Press enter to start the test", PLAIN),
            ("Press esc or q to exit", PLAIN),
        ]
        if self.driver.notice:
            lines.append(("", PLAIN))
            lines.append((self.driver.notice, Style(color="red")))
        return lines

    def _complete_lines(self, result: TestResult) -> List[Tuple[str, Style]]:
        lines = [
            ("Test complete", TITLE_STYLE),
            (f"Duration  {format_duration(result.duration_sec)}", PLAIN),
            (f"WPM       {result.wpm:.1f}  ({result.cwpm:.1f} correct)", PLAIN),
            (f"Accuracy  {result.accuracy:.1f}%", PLAIN),
            (f"Words     {result.words_correct} ok / {result.words_wrong} wrong", PLAIN),
            (f"Backspace {result.corrections}", PLAIN),
        ]
        mistakes = sorted(
            (w for w in result.words if not w.is_correct),
            key=lambda w: w.incorrect,
            reverse=True,
        )[:5]
        if mistakes:
            listed = " ".join(f"{w.expected}({w.incorrect})" for w in mistakes)
            lines.append((f"Mistakes  {listed}", Style(color="red")))
        lines.append(("", PLAIN))
        lines.append(("Press any key to continue", PLAIN))
        return lines

    def _render_stats(self) -> None:
        driver = self.driver
        text = Text()
        if driver.phase is Phase.RUNNING and driver.session is not None:
            session = driver.session
            text.append("Time ", style=MUTED)
            text.append(format_duration(driver.elapsed()), style="bold")
            text.append("   WPM ", style=MUTED)
            text.append(f"{driver.live_wpm():>5.1f}", style="bold")
            text.append("   Word ", style=MUTED)
            text.append(f"{session.current_word_index() + 1}/{len(session.word_list)}", style="bold")
        elif driver.phase is Phase.COMPLETE and driver.result is not None:
            text.append("Done in ", style=MUTED)
            text.append(format_duration(driver.result.duration_sec), style="bold")
        else:
            text.append("Ready", style=MUTED)
        self.stats_bar.update(text)

    def _render_help(self) -> None:
        phase = self.driver.phase
        text = Text()
        if phase is Phase.RUNNING:
            text.append("Space next word  Backspace erase  Esc abandon", style=HINT)
        elif phase is Phase.COMPLETE:
            text.append("Any key: back to start", style=HINT)
        else:
            text.append("Enter start  Esc/q exit", style=HINT)
        text.append("  Ctrl+Q quit", style=MUTED)
        self.help_bar.update(text)
