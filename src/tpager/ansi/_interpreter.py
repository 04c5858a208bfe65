from __future__ import annotations

from typing import Literal, NamedTuple, TypeAlias

import rich.repr

from tpager.ansi._sgr import DEFAULT_ATTRIBUTES, Attributes, apply_sgr

ESCAPE = "\x1b"
SEQUENCE_INTRODUCER = "["
PARAMETER_SEPARATOR = ";"
SGR_TERMINATOR = "m"
ERASE_LINE_TERMINATOR = "K"

Mode: TypeAlias = Literal["normal", "escaped", "sequence"]


@rich.repr.auto
class InterpreterState(NamedTuple):
    """Interpreter mode, and the parameter collected since the last separator."""

    mode: Mode = "normal"
    buffer: str = ""


NORMAL = InterpreterState()


class Transition(NamedTuple):
    """Result of feeding a single character."""

    state: InterpreterState
    attributes: Attributes
    glyph: str | None = None
    """Character to render, or `None` if the character was consumed."""


def step(
    state: InterpreterState, attributes: Attributes, character: str
) -> Transition:
    """Advance the interpreter by a single character.

    Args:
        state: Current state.
        attributes: Current attributes.
        character: Next character from the stream.

    Returns:
        The new state and attributes, and the glyph to render (if any).
    """
    match state.mode:
        case "normal":
            if character == ESCAPE:
                return Transition(InterpreterState("escaped"), attributes)
            return Transition(state, attributes, character)

        case "escaped":
            if character == SEQUENCE_INTRODUCER:
                return Transition(InterpreterState("sequence"), attributes)
            # Not a sequence; the character is handled as if the escape wasn't there
            return step(NORMAL, attributes, character)

        case "sequence":
            if character == PARAMETER_SEPARATOR:
                return Transition(
                    InterpreterState("sequence"), apply_sgr(attributes, state.buffer)
                )
            if character == SGR_TERMINATOR:
                return Transition(NORMAL, apply_sgr(attributes, state.buffer))
            if character == ERASE_LINE_TERMINATOR:
                return Transition(NORMAL, attributes)
            return Transition(
                InterpreterState("sequence", state.buffer + character), attributes
            )

    raise AssertionError(f"Unknown interpreter mode {state.mode!r}")


@rich.repr.auto
class ANSIInterpreter:
    """Separates glyphs from SGR escape sequences, one character at a time."""

    def __init__(self) -> None:
        self.state = NORMAL
        self.attributes = DEFAULT_ATTRIBUTES

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.state
        yield self.attributes

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def reset(self) -> None:
        """Return to normal mode with default attributes."""
        self.state = NORMAL
        self.attributes = DEFAULT_ATTRIBUTES

    def feed(self, character: str) -> str | None:
        """Feed a character.

        Args:
            character: A single character.

        Returns:
            The character to render, or `None` if it was part of an escape sequence.
        """
        self.state, self.attributes, glyph = step(
            self.state, self.attributes, character
        )
        return glyph

    def feed_text(self, text: str) -> list[str]:
        """Feed a string, returning the glyphs it produced."""
        feed = self.feed
        return [glyph for character in text if (glyph := feed(character)) is not None]
