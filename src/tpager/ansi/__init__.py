from tpager.ansi._interpreter import (
    ANSIInterpreter,
    InterpreterState,
    Mode,
    Transition,
    step,
)
from tpager.ansi._sgr import (
    COLOR_NAMES,
    DEFAULT_ATTRIBUTES,
    SGR_CODES,
    Attributes,
    ColorName,
    Modifier,
    apply_sgr,
)

__all__ = [
    "ANSIInterpreter",
    "Attributes",
    "COLOR_NAMES",
    "ColorName",
    "DEFAULT_ATTRIBUTES",
    "InterpreterState",
    "Mode",
    "Modifier",
    "SGR_CODES",
    "Transition",
    "apply_sgr",
    "step",
]
