"""Resolution value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Resolution:
    """Result of comparing a two-card selection.

    Attributes:
        card_ids: Ids of the two evaluated cards, in tap order
        matched: Whether both cards share an image key
        score: Running score after this resolution
        moves: Move count after this resolution
        completed: Whether this resolution cleared the last pair
    """

    card_ids: tuple[int, int]
    matched: bool
    score: int
    moves: int
    completed: bool = False
