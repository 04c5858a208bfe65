from __future__ import annotations

from textual import log
from textual.app import App, ComposeResult

from tpager.settings import Settings
from tpager.store import LineStore
from tpager.widgets.pager import PagerView


class PagerApp(App):
    """Full screen pager for a line store."""

    CSS = """
    Screen {
        overflow: hidden;
    }
    """

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, store: LineStore, settings: Settings) -> None:
        """

        Args:
            store: Lines to display.
            settings: Application settings.
        """
        self.store = store
        self.settings = settings
        super().__init__(ansi_color=True)

    @property
    def tab_width(self) -> int:
        return self.settings.get("pager.tab-width", int)

    def compose(self) -> ComposeResult:
        log("tab width", self.tab_width)
        yield PagerView(self.store, tab_width=self.tab_width)
