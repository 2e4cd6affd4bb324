"""Session controller for memory game lifecycle management."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import partial
from uuid import uuid4

from memory_match.domain.constants import DEFAULT_PAIR_COUNT, EVALUATION_DELAY_MS, MATCH_REWARD
from memory_match.domain.services.deck_builder import build_deck
from memory_match.domain.services.memory_game import MemoryGame
from memory_match.domain.services.score_board import ScoreBoard
from memory_match.domain.value_objects.tap_outcome import TapOutcome
from memory_match.ports.image_catalog import ImageCatalog

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """Raised when no matching game session exists."""

    pass


@dataclass(frozen=True)
class SessionResult:
    """Final result of a completed session."""

    session_id: str
    score: int
    moves: int
    rank: int | None
    finished_at: datetime


class SessionController:
    """Orchestrates game sessions from deck creation to completion.

    Responsibilities:
    - Building the deck and starting one game at a time
    - Handing the final score of a completed game to the ScoreBoard
    - Aborting a running game without reporting a score

    The controller holds the current game in memory. A finished or
    aborted game stays readable until the next session starts; it is
    never restarted.
    """

    def __init__(
        self,
        score_board: ScoreBoard,
        image_catalog: ImageCatalog,
        *,
        pair_count: int = DEFAULT_PAIR_COUNT,
        evaluation_delay_ms: int = EVALUATION_DELAY_MS,
        match_reward: int = MATCH_REWARD,
        auto_resolve: bool = True,
        rng: random.Random | None = None,
    ):
        """Initialize session controller.

        Args:
            score_board: Receives final scores of completed sessions
            image_catalog: Port supplying the default image pool
            pair_count: Default number of pairs per session
            evaluation_delay_ms: How long a revealed pair stays up
            match_reward: Points added per matched pair
            auto_resolve: Let games schedule their own resolution timer
            rng: Random source for dealing
        """
        self._score_board = score_board
        self._image_catalog = image_catalog
        self._pair_count = pair_count
        self._evaluation_delay_ms = evaluation_delay_ms
        self._match_reward = match_reward
        self._auto_resolve = auto_resolve
        self._rng = rng
        self._game: MemoryGame | None = None
        self._last_result: SessionResult | None = None

    @property
    def current_game(self) -> MemoryGame | None:
        """The most recent game, running or finished."""
        return self._game

    @property
    def has_active_session(self) -> bool:
        """Check if a game is currently being played."""
        return self._game is not None and not self._game.state.is_terminal()

    @property
    def last_result(self) -> SessionResult | None:
        """Result of the most recently completed session."""
        return self._last_result

    def start_session(
        self,
        image_pool: Sequence[str] | None = None,
        pair_count: int | None = None,
    ) -> MemoryGame:
        """Deal a new deck and start a game.

        A game still running is aborted first, without reporting a score.

        Args:
            image_pool: Image keys to deal from (defaults to the catalog)
            pair_count: Pairs to deal (defaults to the configured count)

        Returns:
            New game in IDLE state

        Raises:
            DeckConfigurationError: If the deck cannot be built
        """
        pool = list(image_pool) if image_pool is not None else self._image_catalog.get_image_keys()
        pairs = pair_count if pair_count is not None else self._pair_count

        cards = build_deck(pool, pairs, rng=self._rng)

        if self.has_active_session:
            logger.info(f"Replacing running session {self._game.session_id}")
            self._game.abort()

        session_id = str(uuid4())
        game = MemoryGame(
            cards,
            evaluation_delay_ms=self._evaluation_delay_ms,
            match_reward=self._match_reward,
            on_complete=partial(self._on_complete, session_id),
            auto_resolve=self._auto_resolve,
            session_id=session_id,
        )

        self._game = game
        logger.info(f"Started session {game.session_id} with {pairs} pairs")
        return game

    def tap(self, session_id: str, card_id: int) -> TapOutcome:
        """Forward a card tap to the matching game.

        Raises:
            SessionNotFoundError: If session_id is not the current session
        """
        return self.get_game(session_id).tap(card_id)

    def get_game(self, session_id: str) -> MemoryGame:
        """Get the current game if it matches session_id.

        Raises:
            SessionNotFoundError: If no matching game exists
        """
        if self._game is None:
            raise SessionNotFoundError("No active session")
        if self._game.session_id != session_id:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return self._game

    def abort(self) -> bool:
        """End the running game early without reporting a score.

        Returns:
            True if a running game was aborted
        """
        if self._game is None:
            return False
        return self._game.abort()

    def shutdown(self) -> None:
        """Abort any running game (application shutdown)."""
        if self.abort():
            logger.info("Aborted running session on shutdown")

    def _on_complete(self, session_id: str, score: int) -> None:
        game = self._game
        if game is None or game.session_id != session_id:
            # A replaced game cannot complete, but never report a stale one
            logger.warning(f"Ignoring completion of stale session {session_id}")
            return

        rank = self._score_board.record(score)
        self._last_result = SessionResult(
            session_id=game.session_id,
            score=score,
            moves=game.moves,
            rank=rank,
            finished_at=datetime.now(UTC),
        )
