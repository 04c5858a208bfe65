from __future__ import annotations

import pytest

from tpager.ansi import (
    ANSIInterpreter,
    Attributes,
    COLOR_NAMES,
    DEFAULT_ATTRIBUTES,
    InterpreterState,
    Modifier,
    Transition,
    apply_sgr,
    step,
)


def interpret(text: str) -> tuple[list[str], ANSIInterpreter]:
    interpreter = ANSIInterpreter()
    glyphs = interpreter.feed_text(text)
    return glyphs, interpreter


def test_plain_text_is_emitted() -> None:
    glyphs, interpreter = interpret("hello")
    assert glyphs == list("hello")
    assert interpreter.attributes == DEFAULT_ATTRIBUTES


def test_red_foreground() -> None:
    glyphs, interpreter = interpret("\x1b[31mA")
    assert glyphs == ["A"]
    assert interpreter.attributes.foreground == "red"
    assert interpreter.attributes.background is None


def test_bold_and_underline() -> None:
    glyphs, interpreter = interpret("\x1b[1;4m")
    attributes = interpreter.attributes
    assert glyphs == []
    assert attributes.bold
    assert attributes.underline
    assert not attributes.reverse
    assert attributes.foreground is None
    assert attributes.background is None


def test_reverse() -> None:
    _, interpreter = interpret("\x1b[7m")
    assert interpreter.attributes.modifiers == Modifier.REVERSE


@pytest.mark.parametrize("index,color", list(enumerate(COLOR_NAMES)))
def test_colors(index: int, color: str) -> None:
    _, interpreter = interpret(f"\x1b[{30 + index};{40 + index}m")
    assert interpreter.attributes == Attributes(color, color)


@pytest.mark.parametrize("reset", ["\x1b[m", "\x1b[0m", "\x1b[;m"])
def test_reset(reset: str) -> None:
    _, interpreter = interpret(f"\x1b[1;31;42m{reset}")
    assert interpreter.attributes == DEFAULT_ATTRIBUTES


def test_unknown_code_is_ignored() -> None:
    glyphs, interpreter = interpret("\x1b[99m")
    assert glyphs == []
    assert interpreter.attributes == DEFAULT_ATTRIBUTES
    assert interpreter.mode == "normal"


def test_unknown_code_keeps_existing_attributes() -> None:
    _, interpreter = interpret("\x1b[32m\x1b[38;5;200m")
    assert interpreter.attributes == Attributes("green")


def test_foreground_color_replaces_modifiers() -> None:
    _, interpreter = interpret("\x1b[1;31m")
    assert interpreter.attributes == Attributes("red", None, Modifier.NONE)


def test_background_color_keeps_modifiers() -> None:
    _, interpreter = interpret("\x1b[1;44m")
    assert interpreter.attributes == Attributes(None, "blue", Modifier.BOLD)


def test_escape_without_bracket_reevaluates_character() -> None:
    glyphs, interpreter = interpret("\x1bX")
    assert glyphs == ["X"]
    assert interpreter.mode == "normal"


def test_double_escape_starts_sequence() -> None:
    glyphs, interpreter = interpret("\x1b\x1b[31mA")
    assert glyphs == ["A"]
    assert interpreter.attributes.foreground == "red"


def test_erase_line_is_ignored() -> None:
    glyphs, interpreter = interpret("\x1b[32m\x1b[2KA")
    assert glyphs == ["A"]
    assert interpreter.attributes == Attributes("green")


def test_truncated_sequence() -> None:
    glyphs, interpreter = interpret("ab\x1b[3")
    assert glyphs == ["a", "b"]
    assert interpreter.state == InterpreterState("sequence", "3")


def test_tab_is_passed_through() -> None:
    glyphs, _ = interpret("a\tb")
    assert glyphs == ["a", "\t", "b"]


def test_reset_method() -> None:
    _, interpreter = interpret("\x1b[31m\x1b[4")
    interpreter.reset()
    assert interpreter.state == InterpreterState()
    assert interpreter.attributes == DEFAULT_ATTRIBUTES


def test_step_is_pure() -> None:
    state = InterpreterState("sequence", "3")
    transition = step(state, DEFAULT_ATTRIBUTES, "1")
    assert transition == Transition(InterpreterState("sequence", "31"), DEFAULT_ATTRIBUTES)
    assert state == InterpreterState("sequence", "3")

    transition = step(transition.state, transition.attributes, "m")
    assert transition == Transition(InterpreterState(), Attributes("red"))


def test_apply_sgr_returns_new_value() -> None:
    attributes = apply_sgr(DEFAULT_ATTRIBUTES, "4")
    assert attributes.underline
    assert not DEFAULT_ATTRIBUTES.underline


def test_apply_sgr_unknown_parameter() -> None:
    attributes = Attributes("cyan")
    assert apply_sgr(attributes, "38") is attributes
