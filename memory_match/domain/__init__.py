# Domain layer - Game rules (NO external dependencies)

from .entities import Card
from .value_objects import GameState, Resolution, TapOutcome

__all__ = [
    "Card",
    "GameState",
    "Resolution",
    "TapOutcome",
]
