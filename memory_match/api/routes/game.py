"""Game session API routes."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from memory_match.api.dependencies import ImageCatalogDep, SessionControllerDep
from memory_match.domain.services.deck_builder import DeckConfigurationError
from memory_match.domain.services.memory_game import MemoryGame
from memory_match.domain.services.session_controller import SessionNotFoundError
from memory_match.ports.image_catalog import ImageCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/game", tags=["game"])


# =============================================================================
# Request/Response Models
# =============================================================================


class StartGameRequest(BaseModel):
    """Request body for starting a game."""

    pair_count: int | None = Field(default=None, ge=1)


class TapRequest(BaseModel):
    """Request body for tapping a card."""

    session_id: str
    card_id: int


class CardResponse(BaseModel):
    """Card in API response.

    The image is only exposed while the card is face up.
    """

    id: int
    face_up: bool
    in_play: bool
    image_key: str | None = None
    image_file: str | None = None


class GameResponse(BaseModel):
    """Snapshot of a game for rendering."""

    session_id: str
    state: str
    score: int
    moves: int
    checking: bool
    is_complete: bool
    remaining_pairs: int
    evaluation_delay_ms: int
    cards: list[CardResponse]


class TapResponse(BaseModel):
    """Response for a card tap."""

    outcome: str
    accepted: bool
    game: GameResponse


class AbortResponse(BaseModel):
    """Response for aborting a game."""

    aborted: bool
    message: str


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    error: ErrorDetail


def _game_response(game: MemoryGame, image_catalog: ImageCatalog) -> GameResponse:
    cards = [
        CardResponse(
            id=card.id,
            face_up=card.face_up,
            in_play=card.in_play,
            image_key=card.image_key if card.face_up else None,
            image_file=image_catalog.get_image_file(card.image_key) if card.face_up else None,
        )
        for card in game.cards
    ]
    return GameResponse(
        session_id=game.session_id,
        state=game.state.value,
        score=game.score,
        moves=game.moves,
        checking=game.checking,
        is_complete=game.is_complete,
        remaining_pairs=game.remaining_pairs,
        evaluation_delay_ms=game.evaluation_delay_ms,
        cards=cards,
    )


def _session_not_found(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": {
                "code": "SESSION_NOT_FOUND",
                "message": message,
            }
        },
    )


# =============================================================================
# Routes
# =============================================================================


@router.post(
    "/start",
    response_model=GameResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Deck cannot be built"},
    },
)
async def start_game(
    request: StartGameRequest,
    session_controller: SessionControllerDep,
    image_catalog: ImageCatalogDep,
) -> GameResponse:
    """Deal a new deck and start a game.

    A game still running is abandoned without recording its score.
    """
    try:
        game = session_controller.start_session(pair_count=request.pair_count)
    except DeckConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": {
                    "code": "INVALID_DECK",
                    "message": str(e),
                }
            },
        ) from None

    return _game_response(game, image_catalog)


@router.get(
    "/current",
    response_model=GameResponse,
    responses={
        404: {"model": ErrorResponse, "description": "No game started"},
    },
)
async def get_current_game(
    session_controller: SessionControllerDep,
    image_catalog: ImageCatalogDep,
) -> GameResponse:
    """Get the current game, running or finished.

    Used by the frontend to render the grid and to notice completion.
    """
    game = session_controller.current_game
    if game is None:
        raise _session_not_found("No game started")
    return _game_response(game, image_catalog)


@router.post(
    "/tap",
    response_model=TapResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def tap_card(
    request: TapRequest,
    session_controller: SessionControllerDep,
    image_catalog: ImageCatalogDep,
) -> TapResponse:
    """Reveal a card.

    Taps that cannot reveal a card (busy, already face up, matched,
    unknown id) are not errors; the outcome says why nothing happened.
    """
    try:
        game = session_controller.get_game(request.session_id)
    except SessionNotFoundError:
        raise _session_not_found("Session not found or replaced") from None

    outcome = game.tap(request.card_id)
    return TapResponse(
        outcome=outcome.value,
        accepted=outcome.changed_state,
        game=_game_response(game, image_catalog),
    )


@router.post("/abort", response_model=AbortResponse)
async def abort_game(
    session_controller: SessionControllerDep,
) -> AbortResponse:
    """Exit the running game without recording a score."""
    aborted = session_controller.abort()
    message = "Game aborted" if aborted else "No running game"
    return AbortResponse(aborted=aborted, message=message)
