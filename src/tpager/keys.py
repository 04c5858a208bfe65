from __future__ import annotations

from math import ceil
from typing import Literal, Mapping, TypeAlias

PagerAction: TypeAlias = Literal[
    "line_down",
    "line_up",
    "half_page_down",
    "half_page_up",
    "page_down",
    "page_up",
    "jump_top",
    "jump_bottom",
    "quit",
]

# Rows kept from the previous page when paging
PAGE_MARGIN = 3

# Textual key names
KEY_ACTIONS: Mapping[str, PagerAction] = {
    "j": "line_down",
    "down": "line_down",
    "ctrl+n": "line_down",
    "enter": "line_down",
    "k": "line_up",
    "up": "line_up",
    "ctrl+p": "line_up",
    "ctrl+d": "half_page_down",
    "ctrl+u": "half_page_up",
    "ctrl+f": "page_down",
    "space": "page_down",
    "pagedown": "page_down",
    "ctrl+b": "page_up",
    "pageup": "page_up",
    "g": "jump_top",
    "G": "jump_bottom",
    "shift+g": "jump_bottom",
    "q": "quit",
}


def action_for_key(key: str) -> PagerAction | None:
    """Get the action bound to a key.

    Args:
        key: A Textual key name, e.g. "ctrl+d".

    Returns:
        The action, or `None` if the key isn't bound.
    """
    return KEY_ACTIONS.get(key)


def page_size(height: int) -> int:
    """Lines to scroll for a full page."""
    return max(0, height - PAGE_MARGIN)


def half_page_size(height: int) -> int:
    """Lines to scroll for half a page."""
    return ceil(height / 2)
