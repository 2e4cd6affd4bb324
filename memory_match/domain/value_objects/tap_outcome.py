"""Tap outcome value object."""

from enum import StrEnum


class TapOutcome(StrEnum):
    """What a tap on a card did.

    Only ACCEPTED and PAIR_SELECTED change the game; every other outcome
    is a no-op reported back to the caller.
    """

    ACCEPTED = "accepted"  # Card revealed, first of the pair
    PAIR_SELECTED = "pair_selected"  # Card revealed, pair now evaluating
    BUSY = "busy"  # Pair already selected or being checked
    ALREADY_FACE_UP = "already_face_up"
    NOT_IN_PLAY = "not_in_play"  # Pair already matched
    INVALID_CARD = "invalid_card"  # No card with that id
    FINISHED = "finished"  # Game complete or aborted

    @property
    def changed_state(self) -> bool:
        """Whether the tap revealed a card."""
        return self in (TapOutcome.ACCEPTED, TapOutcome.PAIR_SELECTED)
