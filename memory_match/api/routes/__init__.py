"""API routes module."""

from .game import router as game_router
from .scores import router as scores_router

__all__ = ["game_router", "scores_router"]
