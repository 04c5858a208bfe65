from __future__ import annotations

from functools import lru_cache

from rich.cells import cell_len
from rich.segment import Segment
from rich.style import Style as RichStyle

from textual import events, log
from textual.binding import Binding
from textual.strip import Strip
from textual.widget import Widget

from tpager.ansi import Attributes
from tpager.keys import KEY_ACTIONS, half_page_size, page_size
from tpager.render import CellGrid, character_width, render_lines
from tpager.store import LineStore
from tpager.viewport import Viewport


@lru_cache(maxsize=1024)
def attributes_to_style(attributes: Attributes) -> RichStyle:
    """Convert attributes in to a Rich style.

    Args:
        attributes: Cell attributes.

    Returns:
        A Rich Style.
    """
    return RichStyle(
        color=attributes.foreground,
        bgcolor=attributes.background,
        bold=attributes.bold or None,
        underline=attributes.underline or None,
        reverse=attributes.reverse or None,
    )


class PagerView(Widget, can_focus=True):
    """Displays a line store, one screen at a time."""

    DEFAULT_CSS = """
    PagerView {
        width: 1fr;
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding(
            key,
            "app.quit" if action == "quit" else action,
            action.replace("_", " ").capitalize(),
            show=False,
        )
        for key, action in KEY_ACTIONS.items()
    ]

    def __init__(
        self,
        store: LineStore,
        tab_width: int = 8,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
    ) -> None:
        self.line_store = store
        self.tab_width = tab_width
        self.viewport = Viewport(len(store))
        self.cell_grid = CellGrid(0, 0)
        super().__init__(name=name, id=id, classes=classes, disabled=disabled)

    def on_mount(self) -> None:
        width, height = self.size
        self.update_size(width, height)

    def on_resize(self, event: events.Resize) -> None:
        width, height = self.size
        log("pager resize", width=width, height=height)
        self.update_size(width, height)

    def update_size(self, width: int, height: int) -> None:
        """Resize the cell grid and repaint.

        Args:
            width: Width in cells.
            height: Height in cells.
        """
        self.cell_grid.resize(width, height)
        self.viewport.update_size(height)
        self.redraw()

    def redraw(self) -> None:
        """Render the visible lines in to the grid."""
        log(
            "pager redraw",
            offset=self.viewport.offset,
            lines=len(self.line_store),
            size=self.cell_grid.size,
        )
        render_lines(
            self.line_store, self.viewport.offset, self.cell_grid, self.tab_width
        )
        self.refresh()

    def action_line_down(self) -> None:
        self.viewport.scroll_down(1)
        self.redraw()

    def action_line_up(self) -> None:
        self.viewport.scroll_up(1)
        self.redraw()

    def action_half_page_down(self) -> None:
        self.viewport.scroll_down(half_page_size(self.viewport.height))
        self.redraw()

    def action_half_page_up(self) -> None:
        self.viewport.scroll_up(half_page_size(self.viewport.height))
        self.redraw()

    def action_page_down(self) -> None:
        self.viewport.scroll_down(page_size(self.viewport.height))
        self.redraw()

    def action_page_up(self) -> None:
        self.viewport.scroll_up(page_size(self.viewport.height))
        self.redraw()

    def action_jump_top(self) -> None:
        self.viewport.jump_top()
        self.redraw()

    def action_jump_bottom(self) -> None:
        self.viewport.jump_bottom()
        self.redraw()

    def render_line(self, y: int) -> Strip:
        width, height = self.cell_grid.size
        base_style = self.rich_style
        if y >= height:
            return Strip.blank(self.size.width, base_style)
        segments: list[Segment] = []
        row = self.cell_grid.rows[y]
        x = 0
        while x < width:
            if (cell := row[x]) is None:
                segments.append(Segment(" ", base_style))
                x += 1
            else:
                cell_width = character_width(cell.character)
                # Pad so the segment covers every column the cursor advanced
                padding = " " * (cell_width - cell_len(cell.character))
                segments.append(
                    Segment(
                        cell.character + padding,
                        base_style + attributes_to_style(cell.attributes),
                    )
                )
                x += cell_width
        strip = Strip(segments).simplify()
        return strip.crop(0, width).adjust_cell_length(width, base_style)
