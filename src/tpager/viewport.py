from __future__ import annotations

import rich.repr


@rich.repr.auto
class Viewport:
    """Tracks the first visible line.

    The offset is kept within `0 <= offset <= max(0, line_count - height)`.
    """

    def __init__(self, line_count: int, height: int = 0) -> None:
        self._line_count = line_count
        self._height = height
        self._offset = 0

    def __rich_repr__(self) -> rich.repr.Result:
        yield "offset", self._offset
        yield "line_count", self._line_count
        yield "height", self._height

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def line_count(self) -> int:
        return self._line_count

    @property
    def height(self) -> int:
        return self._height

    @property
    def max_offset(self) -> int:
        """The largest valid offset for the current height."""
        return max(0, self._line_count - self._height)

    @property
    def visible_range(self) -> range:
        """Indices of the lines currently on screen."""
        return range(self._offset, min(self._offset + self._height, self._line_count))

    def update_size(self, height: int) -> None:
        """Set a new screen height.

        Args:
            height: Height in rows.
        """
        self._height = max(0, height)
        self._offset = min(self._offset, self.max_offset)

    def scroll_up(self, lines: int) -> None:
        self._offset = max(0, self._offset - lines)

    def scroll_down(self, lines: int) -> None:
        self._offset = min(self._offset + lines, self.max_offset)

    def jump_top(self) -> None:
        self._offset = 0

    def jump_bottom(self) -> None:
        self._offset = self.max_offset
