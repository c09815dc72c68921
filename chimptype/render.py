from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Sequence, Tuple

from .screen import Canvas, PLAIN, Style
from .session import TypingSession


class GlyphClass(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    PENDING = "pending"
    OVERFLOW = "overflow"


GLYPH_STYLES: Dict[GlyphClass, Style] = {
    GlyphClass.CORRECT: Style(bold=True, color="green"),
    GlyphClass.INCORRECT: Style(color="red"),
    GlyphClass.PENDING: PLAIN,
    GlyphClass.OVERFLOW: Style(underline=True, color="red"),
}

UNTYPED_WORD_STYLE = Style(underline=True)
# the cell the next key will land on
CARET_STYLE = Style(reverse=True)


@dataclass(frozen=True)
class Glyph:
    char: str
    klass: GlyphClass
    underline: bool = False

    @property
    def style(self) -> Style:
        if self.klass is GlyphClass.PENDING and self.underline:
            return UNTYPED_WORD_STYLE
        return GLYPH_STYLES[self.klass]


class Placement(NamedTuple):
    index: int
    column: int
    row: int


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int


def classify_word(expected: str, typed: str, current: bool = True) -> List[Glyph]:
    """
    Classify every on-screen position of one word.

    Pending letters are underlined on every word except the one being typed.
    """
    glyphs: List[Glyph] = []
    for i in range(max(len(expected), len(typed))):
        want = expected[i] if i < len(expected) else None
        got = typed[i] if i < len(typed) else None
        if want is not None and got is not None:
            klass = GlyphClass.CORRECT if want == got else GlyphClass.INCORRECT
            glyphs.append(Glyph(got, klass))
        elif want is not None:
            glyphs.append(Glyph(want, GlyphClass.PENDING, underline=not current))
        else:
            glyphs.append(Glyph(got, GlyphClass.OVERFLOW))
    return glyphs


def layout_words(words: Sequence[str], typed: Sequence[str], width: int) -> List[Placement]:
    """Wrap words left to right without ever splitting one across rows."""
    placements: List[Placement] = []
    column, row = 0, 0
    for i, word in enumerate(words):
        attempt = typed[i] if i < len(typed) else ""
        span = max(len(word), len(attempt)) + 1
        if column > 0 and column + span > width:
            column, row = 0, row + 1
        placements.append(Placement(i, column, row))
        column += span
    return placements


def first_visible_row(current_row: int, visible_rows: int) -> int:
    """
    First layout row to show so that current_row stays on screen.

    Scrolls in whole rows: once the current row would fall below the block,
    it is shown second from the top with the previous row above it.
    """
    if current_row < visible_rows:
        return 0
    return current_row - min(1, visible_rows - 1)


class Renderer:
    """Draws a session snapshot onto a Canvas, one full frame per call."""

    def __init__(self, padding: int = 10) -> None:
        self.padding = max(0, padding)

    def origin(self, viewport: Viewport) -> Tuple[int, int]:
        """Top-left corner of the word block: padded left, a little above the middle."""
        padding = self.padding
        if viewport.width - 2 * padding < 1:
            padding = 0
        return padding, max(0, viewport.height // 2 - 3)

    def draw(self, session: TypingSession, canvas: Canvas, viewport: Viewport) -> None:
        left, top = self.origin(viewport)
        width = max(1, viewport.width - 2 * left)

        # clear row by row so the screen does not scroll between frames
        for row in range(canvas.height):
            canvas.clear_row(row)

        words = session.target_words()
        typed = session.typed_text_segments()
        current = session.current_word_index()
        caret = -1 if session.is_finished() else session.char_index_within_current_word()
        placements = layout_words(words, typed, width)
        first = first_visible_row(placements[current].row, max(1, viewport.height - top))

        cursor = (left, top)
        for placement in placements:
            if placement.row < first:
                continue
            column, row = left + placement.column, top + placement.row - first
            attempt = typed[placement.index] if placement.index < len(typed) else ""
            is_current = placement.index == current
            if is_current and caret >= 0:
                cursor = (column + caret, row)
            canvas.move_cursor(column, row)
            glyphs = classify_word(words[placement.index], attempt, is_current)
            for i, glyph in enumerate(glyphs):
                canvas.write(glyph.char, CARET_STYLE if is_current and i == caret else glyph.style)
            canvas.write(" ", CARET_STYLE if is_current and caret == len(glyphs) else PLAIN)

        canvas.move_cursor(*cursor)
        canvas.flush()
