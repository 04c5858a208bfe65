from __future__ import annotations

from functools import lru_cache
from typing import Iterable, NamedTuple, Protocol, Sequence
import unicodedata

import rich.repr
from rich.cells import cell_len

from tpager.ansi import ANSIInterpreter, Attributes, DEFAULT_ATTRIBUTES

TAB = "\t"
CONTROL_PLACEHOLDER = " "


@lru_cache(maxsize=4096)
def character_width(character: str) -> int:
    """Get the number of columns the cursor advances for a glyph.

    Double width glyphs are 2 cells. Zero width and ambiguous width glyphs
    are treated as a single cell.

    Args:
        character: A single character.

    Returns:
        Width in cells (1 or 2).
    """
    width = cell_len(character)
    if width == 0:
        return 1
    if width == 2 and unicodedata.east_asian_width(character) == "A":
        return 1
    return width


@lru_cache(maxsize=1024)
def is_control(character: str) -> bool:
    """Is the character a non-printing control code (C0, C1, or DEL)?"""
    return unicodedata.category(character) == "Cc"


@rich.repr.auto
class Cell(NamedTuple):
    """A single painted cell."""

    character: str
    attributes: Attributes = DEFAULT_ATTRIBUTES


class Surface(Protocol):
    """The capabilities the renderer requires from a terminal."""

    @property
    def size(self) -> tuple[int, int]:
        """Width and height in cells."""
        ...

    def clear(self) -> None: ...

    def set_cell(
        self, x: int, y: int, character: str, attributes: Attributes
    ) -> None: ...

    def flush(self) -> None: ...


class CellGrid:
    """An in-memory grid of cells.

    Writes outside of the grid are ignored.
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = max(0, width)
        self._height = max(0, height)
        self.rows: list[list[Cell | None]] = self._blank_rows()
        self.flushes = 0

    def __repr__(self) -> str:
        return f"CellGrid({self._width}, {self._height})"

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def _blank_rows(self) -> list[list[Cell | None]]:
        return [[None] * self._width for _ in range(self._height)]

    def resize(self, width: int, height: int) -> None:
        """Change the size of the grid, clearing all cells."""
        self._width = max(0, width)
        self._height = max(0, height)
        self.clear()

    def clear(self) -> None:
        self.rows = self._blank_rows()

    def set_cell(self, x: int, y: int, character: str, attributes: Attributes) -> None:
        if 0 <= x < self._width and 0 <= y < self._height:
            self.rows[y][x] = Cell(character, attributes)

    def flush(self) -> None:
        self.flushes += 1

    def get_cell(self, x: int, y: int) -> Cell | None:
        """Get the cell at the given offset, or `None` if it is blank."""
        return self.rows[y][x]

    def get_text(self, y: int) -> str:
        """Get the characters on a row, with blank cells as spaces."""
        text: list[str] = []
        x = 0
        row = self.rows[y]
        while x < self._width:
            if (cell := row[x]) is None:
                text.append(" ")
                x += 1
            else:
                text.append(cell.character)
                x += character_width(cell.character)
        return "".join(text)


def render_line(
    line: str,
    y: int,
    surface: Surface,
    interpreter: ANSIInterpreter,
    tab_width: int,
) -> int:
    """Render a single line.

    Args:
        line: Line text, which may contain escape sequences.
        y: Row to render in to.
        surface: Destination surface.
        interpreter: Interpreter, which carries state from the previous line.
        tab_width: Columns to advance for a tab.

    Returns:
        The final column, which may exceed the width of the surface.
    """
    feed = interpreter.feed
    set_cell = surface.set_cell
    x = 0
    for character in line:
        if character == TAB:
            # Tabs never reach the interpreter, even mid sequence
            x += tab_width
            continue
        if (glyph := feed(character)) is None:
            continue
        if is_control(glyph):
            set_cell(x, y, CONTROL_PLACEHOLDER, interpreter.attributes)
            x += 1
        else:
            set_cell(x, y, glyph, interpreter.attributes)
            x += character_width(glyph)
    return x


def render_lines(
    lines: Sequence[str],
    offset: int,
    surface: Surface,
    tab_width: int = 8,
) -> None:
    """Repaint a surface with lines from the given offset.

    Args:
        lines: All lines.
        offset: Index of the first line to show.
        surface: Destination surface.
        tab_width: Columns to advance for a tab.
    """
    _width, height = surface.size
    surface.clear()
    interpreter = ANSIInterpreter()
    visible_lines: Iterable[str] = lines[offset : offset + height]
    for y, line in enumerate(visible_lines):
        render_line(line, y, surface, interpreter, tab_width)
    surface.flush()
