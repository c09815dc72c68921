from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from rich.text import Text

COLORS = ("default", "green", "red")


@dataclass(frozen=True)
class Style:
    bold: bool = False
    underline: bool = False
    color: str = "default"
    reverse: bool = False

    def __post_init__(self) -> None:
        if self.color not in COLORS:
            raise ValueError(f"unsupported color {self.color!r}")

    def to_rich(self) -> str:
        parts = []
        if self.bold:
            parts.append("bold")
        if self.underline:
            parts.append("underline")
        if self.reverse:
            parts.append("reverse")
        if self.color != "default":
            parts.append(self.color)
        return " ".join(parts)


PLAIN = Style()


class Canvas:
    """
    A fixed grid of styled rows standing in for the terminal screen.

    Nothing reaches the sink until flush(), so a whole frame (clear, layout,
    writes) is shown at once.
    """

    def __init__(self, width: int, height: int, sink: Optional[Callable[[Text], None]] = None) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.sink = sink
        self.rows: List[Text] = [Text() for _ in range(self.height)]
        self.cursor: Tuple[int, int] = (0, 0)
        self.last_frame: Optional[Text] = None

    def resize(self, width: int, height: int) -> None:
        width, height = max(0, width), max(0, height)
        if height > self.height:
            self.rows.extend(Text() for _ in range(height - self.height))
        else:
            del self.rows[height:]
        self.width, self.height = width, height
        self.rows = [row[:width] for row in self.rows]

    def clear_all(self) -> None:
        self.rows = [Text() for _ in range(self.height)]
        self.cursor = (0, 0)

    def clear_row(self, row: int) -> None:
        if 0 <= row < self.height:
            self.rows[row] = Text()

    def move_cursor(self, column: int, row: int) -> None:
        self.cursor = (max(0, column), max(0, row))

    def write(self, text: str, style: Style = PLAIN) -> None:
        """Write at the cursor, overwriting what is there. Clipped to the grid."""
        column, row = self.cursor
        self.cursor = (column + len(text), row)
        if row >= self.height or column >= self.width:
            return
        text = text[: self.width - column]
        line = self.rows[row]
        if len(line) < column:
            line.append(" " * (column - len(line)))
        chunk = Text(text, style=style.to_rich())
        self.rows[row] = Text.assemble(line[:column], chunk, line[column + len(text):])

    def frame(self) -> Text:
        return Text("\n").join(self.rows)

    def flush(self) -> Text:
        self.last_frame = self.frame()
        if self.sink is not None:
            self.sink(self.last_frame)
        return self.last_frame

    def row_text(self, row: int) -> str:
        return self.rows[row].plain
