"""Card entity representing one position on the memory grid."""

from dataclasses import dataclass, replace
from typing import Self, TypedDict


class CardDict(TypedDict):
    """Card data structure for serialization."""

    id: int
    image_key: str
    face_up: bool
    in_play: bool


@dataclass(frozen=True)
class Card:
    """Memory card entity.

    Cards are immutable; every flip produces a new revision of the card
    with the same id.

    Attributes:
        id: Grid position, unique and stable for the session
        image_key: Image shared by the card and its pair
        face_up: True while the card is revealed to the player
        in_play: True until the card's pair has been matched
    """

    id: int
    image_key: str
    face_up: bool = False
    in_play: bool = True

    def flipped_up(self) -> Self:
        """Return a face-up revision of this card."""
        return replace(self, face_up=True)

    def flipped_down(self) -> Self:
        """Return a face-down revision of this card."""
        return replace(self, face_up=False)

    def removed(self) -> Self:
        """Return a revision taken out of play (pair matched)."""
        return replace(self, in_play=False)

    def to_dict(self) -> CardDict:
        """Convert card to dictionary for serialization."""
        return {
            "id": self.id,
            "image_key": self.image_key,
            "face_up": self.face_up,
            "in_play": self.in_play,
        }
