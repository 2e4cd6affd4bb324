"""Game state value object for the card-flipping state machine."""

from enum import StrEnum


class GameState(StrEnum):
    """Memory game states.

    State machine:
        IDLE -> ONE_SELECTED -> EVALUATING -> IDLE
                                    |
                                    v
                                COMPLETE

        any non-terminal state -> ABORTED

    States:
        IDLE: No card selected, waiting for the first tap
        ONE_SELECTED: One card revealed, waiting for the second tap
        EVALUATING: Two cards revealed, resolution scheduled after the delay
        COMPLETE: Every pair has been matched
        ABORTED: Session ended early (exit game), no score reported
    """

    IDLE = "idle"
    ONE_SELECTED = "one_selected"
    EVALUATING = "evaluating"
    COMPLETE = "complete"
    ABORTED = "aborted"

    def is_terminal(self) -> bool:
        """Check if the game is over."""
        return self in (GameState.COMPLETE, GameState.ABORTED)
