"""FastAPI dependency injection module.

Provides singleton instances of services for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from typing import Annotated

from fastapi import Depends

from memory_match.adapters.bundled_images import BundledImageCatalog
from memory_match.config import (
    get_evaluation_delay_ms,
    get_image_catalog_path,
    get_match_reward,
    get_pair_count,
    get_scoreboard_capacity,
)
from memory_match.domain.services.score_board import ScoreBoard
from memory_match.domain.services.session_controller import SessionController
from memory_match.ports.image_catalog import ImageCatalog

logger = logging.getLogger(__name__)


# Singletons stored at module level
_image_catalog: ImageCatalog | None = None
_score_board: ScoreBoard | None = None
_session_controller: SessionController | None = None


async def init_dependencies() -> None:
    """Initialize all singleton dependencies.

    Called during FastAPI lifespan startup. The score board lives for the
    process lifetime and is created empty.
    """
    global _image_catalog, _score_board, _session_controller

    catalog_path = get_image_catalog_path()
    _image_catalog = BundledImageCatalog(catalog_path)
    logger.info(
        f"Image catalog loaded from {catalog_path or 'bundled manifest'} "
        f"({len(_image_catalog.get_image_keys())} images)"
    )

    _score_board = ScoreBoard(capacity=get_scoreboard_capacity())

    _session_controller = SessionController(
        score_board=_score_board,
        image_catalog=_image_catalog,
        pair_count=get_pair_count(),
        evaluation_delay_ms=get_evaluation_delay_ms(),
        match_reward=get_match_reward(),
    )


async def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    Called during FastAPI lifespan shutdown.
    Aborts a running game so no resolution timer outlives the loop.
    """
    if _session_controller is not None:
        _session_controller.shutdown()


def get_image_catalog() -> ImageCatalog:
    """Dependency: Get ImageCatalog instance."""
    if _image_catalog is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _image_catalog


def get_score_board() -> ScoreBoard:
    """Dependency: Get ScoreBoard instance."""
    if _score_board is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _score_board


def get_session_controller() -> SessionController:
    """Dependency: Get SessionController instance."""
    if _session_controller is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _session_controller


# Type aliases for dependency injection
ImageCatalogDep = Annotated[ImageCatalog, Depends(get_image_catalog)]
ScoreBoardDep = Annotated[ScoreBoard, Depends(get_score_board)]
SessionControllerDep = Annotated[SessionController, Depends(get_session_controller)]
