"""Score board API routes."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from memory_match.api.dependencies import ScoreBoardDep, SessionControllerDep
from memory_match.config import is_production

router = APIRouter(prefix="/api/scores", tags=["scores"])


class LastResultResponse(BaseModel):
    """Most recent completed session."""

    session_id: str
    score: int
    moves: int
    rank: int | None


class ScoresResponse(BaseModel):
    """Response for the records view."""

    top_scores: list[int]
    capacity: int
    last_result: LastResultResponse | None = None


class ClearScoresResponse(BaseModel):
    """Response for clearing the board."""

    cleared: int


@router.get("", response_model=ScoresResponse)
async def list_scores(
    score_board: ScoreBoardDep,
    session_controller: SessionControllerDep,
) -> ScoresResponse:
    """Top scores, best first, plus the result of the last finished game."""
    result = session_controller.last_result
    last_result = None
    if result is not None:
        last_result = LastResultResponse(
            session_id=result.session_id,
            score=result.score,
            moves=result.moves,
            rank=result.rank,
        )

    return ScoresResponse(
        top_scores=list(score_board.top_scores()),
        capacity=score_board.capacity,
        last_result=last_result,
    )


@router.delete(
    "",
    response_model=ClearScoresResponse,
    responses={
        403: {"description": "Not available in production"},
    },
)
async def clear_scores(score_board: ScoreBoardDep) -> ClearScoresResponse:
    """Empty the score board (DEV ONLY)."""
    if is_production():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": {
                    "code": "FORBIDDEN",
                    "message": "Not available in production",
                }
            },
        )

    cleared = len(score_board.top_scores())
    score_board.clear()
    return ClearScoresResponse(cleared=cleared)
