"""Domain services - orchestration and game rules."""

from .deck_builder import (
    DeckConfigurationError,
    build_deck,
)
from .memory_game import (
    CompletionCallback,
    InvalidCardIdError,
    MemoryGame,
)
from .score_board import ScoreBoard
from .session_controller import (
    SessionController,
    SessionNotFoundError,
    SessionResult,
)

__all__ = [
    "build_deck",
    "DeckConfigurationError",
    "MemoryGame",
    "CompletionCallback",
    "InvalidCardIdError",
    "ScoreBoard",
    "SessionController",
    "SessionNotFoundError",
    "SessionResult",
]
