"""Tests for chimptype.screen: styles and the canvas."""

from __future__ import annotations

import pytest

from chimptype.screen import Canvas, PLAIN, Style


class TestStyle:
    def test_plain(self):
        assert PLAIN.to_rich() == ""

    def test_reverse(self):
        assert Style(reverse=True).to_rich() == "reverse"

    def test_combined(self):
        assert Style(bold=True, underline=True, color="red").to_rich() == "bold underline red"

    def test_unknown_color(self):
        with pytest.raises(ValueError):
            Style(color="blue")


class TestCanvas:
    def test_write_at_cursor(self):
        canvas = Canvas(10, 3)
        canvas.move_cursor(2, 1)
        canvas.write("hi")
        canvas.write("!")
        assert canvas.row_text(1) == "  hi!"
        assert canvas.cursor == (5, 1)

    def test_overwrite_keeps_tail(self):
        canvas = Canvas(10, 1)
        canvas.write("abcdef")
        canvas.move_cursor(1, 0)
        canvas.write("XY", Style(color="green"))
        assert canvas.row_text(0) == "aXYdef"
        assert [(s.start, s.end, s.style) for s in canvas.rows[0].spans] == [(1, 3, "green")]

    def test_clipped_to_grid(self):
        canvas = Canvas(4, 2)
        canvas.write("abcdef")
        canvas.move_cursor(0, 5)
        canvas.write("lost")
        assert canvas.row_text(0) == "abcd"
        assert canvas.frame().plain == "abcd\n"

    def test_clear_row_and_all(self):
        canvas = Canvas(10, 2)
        canvas.write("top")
        canvas.move_cursor(0, 1)
        canvas.write("bottom")
        canvas.clear_row(0)
        assert canvas.frame().plain == "\nbottom"
        canvas.clear_all()
        assert canvas.frame().plain == "\n"
        assert canvas.cursor == (0, 0)

    def test_nothing_reaches_sink_before_flush(self):
        frames = []
        canvas = Canvas(10, 2, sink=frames.append)
        canvas.write("abc")
        assert frames == []
        frame = canvas.flush()
        assert frames == [frame]
        assert frame.plain == "abc\n"

    def test_resize(self):
        canvas = Canvas(10, 2)
        canvas.write("abcdefgh")
        canvas.resize(4, 3)
        assert canvas.height == 3
        assert canvas.row_text(0) == "abcd"
        canvas.resize(4, 1)
        assert len(canvas.rows) == 1
