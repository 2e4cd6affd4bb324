"""Domain value objects - immutable objects without identity."""

from .game_state import GameState
from .resolution import Resolution
from .tap_outcome import TapOutcome

__all__ = [
    "GameState",
    "Resolution",
    "TapOutcome",
]
