from enum import Enum, auto


class ProcessorState(Enum):
    """
    Argument processor state machine.
    """

    IDLE = auto()          # Command buffer empty
    ACCUMULATING = auto()  # Incomplete -c fragment waiting for more text
    EXITING = auto()       # Input exhausted, session released

    FAILED = auto()        # Fatal option error or unignored evaluation failure
