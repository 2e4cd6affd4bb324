"""Score board keeping the best finished-session scores."""

import logging

from memory_match.domain.constants import SCOREBOARD_CAPACITY

logger = logging.getLogger(__name__)


class ScoreBoard:
    """In-memory top-N list of session scores.

    Scores are kept in descending order. Equal scores keep insertion
    order, so an older score ranks above a newer equal one. The board
    lives for the process lifetime; nothing is persisted.
    """

    def __init__(self, capacity: int = SCOREBOARD_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._scores: list[int] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, score: int) -> int | None:
        """Add a finished session's score.

        Args:
            score: Final session score

        Returns:
            1-based rank the score took, or None if it did not make the board
        """
        # Stable even with reverse=True: the new score lands after equal older ones
        ranked = sorted([*self._scores, score], reverse=True)
        self._scores = ranked[: self._capacity]

        rank = self._rank_of_newest(score, ranked)
        if rank is None:
            logger.info(f"Score {score} did not make the top {self._capacity}")
        else:
            logger.info(f"Score {score} recorded at rank {rank}")
        return rank

    def top_scores(self) -> tuple[int, ...]:
        """Read-only view of the board, best first."""
        return tuple(self._scores)

    def clear(self) -> None:
        """Remove every recorded score."""
        self._scores.clear()

    def _rank_of_newest(self, score: int, ranked: list[int]) -> int | None:
        # Newest entry is the last occurrence of its value
        position = len(ranked) - 1 - ranked[::-1].index(score)
        if position >= self._capacity:
            return None
        return position + 1
