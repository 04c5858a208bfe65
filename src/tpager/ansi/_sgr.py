from __future__ import annotations

from enum import IntFlag
from typing import Callable, Literal, Mapping, NamedTuple, TypeAlias

import rich.repr

ColorName: TypeAlias = Literal[
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"
]

COLOR_NAMES: tuple[ColorName, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)


class Modifier(IntFlag):
    """Display modifiers carried on the foreground channel."""

    NONE = 0
    BOLD = 1
    UNDERLINE = 2
    REVERSE = 4


@rich.repr.auto
class Attributes(NamedTuple):
    """The running foreground / background pair.

    A color of `None` means the terminal default.
    """

    foreground: ColorName | None = None
    """Foreground color."""
    background: ColorName | None = None
    """Background color."""
    modifiers: Modifier = Modifier.NONE
    """Modifier bits, which live on the foreground channel."""

    def __rich_repr__(self) -> rich.repr.Result:
        yield "foreground", self.foreground, None
        yield "background", self.background, None
        yield "modifiers", self.modifiers, Modifier.NONE

    @property
    def bold(self) -> bool:
        return Modifier.BOLD in self.modifiers

    @property
    def underline(self) -> bool:
        return Modifier.UNDERLINE in self.modifiers

    @property
    def reverse(self) -> bool:
        return Modifier.REVERSE in self.modifiers


DEFAULT_ATTRIBUTES = Attributes()

SetAttributes: TypeAlias = Callable[[Attributes], Attributes]


def reset(attributes: Attributes) -> Attributes:
    """Restore both channels to the default."""
    return DEFAULT_ATTRIBUTES


def set_foreground(color: ColorName) -> SetAttributes:
    """Replace the foreground channel (color and modifiers)."""

    def apply(attributes: Attributes) -> Attributes:
        return Attributes(color, attributes.background, Modifier.NONE)

    return apply


def set_background(color: ColorName) -> SetAttributes:
    """Replace the background channel."""

    def apply(attributes: Attributes) -> Attributes:
        return attributes._replace(background=color)

    return apply


def add_modifier(modifier: Modifier) -> SetAttributes:
    """OR a modifier bit in to the foreground channel."""

    def apply(attributes: Attributes) -> Attributes:
        return attributes._replace(modifiers=attributes.modifiers | modifier)

    return apply


SGR_CODES: Mapping[str, SetAttributes] = {
    "": reset,
    "0": reset,
    "1": add_modifier(Modifier.BOLD),
    "4": add_modifier(Modifier.UNDERLINE),
    "7": add_modifier(Modifier.REVERSE),
    **{
        f"{30 + index}": set_foreground(color)
        for index, color in enumerate(COLOR_NAMES)
    },
    **{
        f"{40 + index}": set_background(color)
        for index, color in enumerate(COLOR_NAMES)
    },
}


def apply_sgr(attributes: Attributes, parameter: str) -> Attributes:
    """Apply a single SGR parameter.

    Args:
        attributes: Current attributes.
        parameter: Parameter text, e.g. "31".

    Returns:
        New attributes, or the same attributes if the parameter isn't supported.
    """
    if (set_attributes := SGR_CODES.get(parameter)) is None:
        return attributes
    return set_attributes(attributes)
