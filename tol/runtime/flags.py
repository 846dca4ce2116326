from enum import Flag, auto


class CommandFlags(Flag):
    """Modifiers that apply to the next evaluated command only."""

    CONTINUE = auto()
    IGNORE_ERRORS = auto()
    PRINT_RESULT = auto()


NO_FLAGS = CommandFlags(0)
