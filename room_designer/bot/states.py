"""FSM states for bot."""

from aiogram.fsm.state import State, StatesGroup


class GenerationStates(StatesGroup):
    """States for the nursery design flow."""

    IDLE = State()  # Filling the form
    PROCESSING = State()  # Image → advice calls in flight
    SHOW_RESULT = State()  # Design shown, waiting for "generate again"
    FAILED = State()  # Submission ended with an error
