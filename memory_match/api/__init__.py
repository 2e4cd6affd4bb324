"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    ImageCatalogDep,
    ScoreBoardDep,
    SessionControllerDep,
    cleanup_dependencies,
    get_image_catalog,
    get_score_board,
    get_session_controller,
    init_dependencies,
)
from .routes import game_router, scores_router

__all__ = [
    # Routes
    "game_router",
    "scores_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "get_image_catalog",
    "get_score_board",
    "get_session_controller",
    # Type aliases
    "ImageCatalogDep",
    "ScoreBoardDep",
    "SessionControllerDep",
]
