"""Memory game state machine.

Owns the cards of one session and drives the reveal/evaluate cycle:

    IDLE --tap--> ONE_SELECTED --tap--> EVALUATING --delay--> IDLE
                                                        \\--> COMPLETE

A revealed pair stays face up for the evaluation delay, then ``resolve()``
runs from an asyncio task. Taps while a pair is up are dropped, not queued.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from uuid import uuid4

from memory_match.domain.constants import CARDS_PER_PAIR, EVALUATION_DELAY_MS, MATCH_REWARD
from memory_match.domain.entities.card import Card
from memory_match.domain.value_objects.game_state import GameState
from memory_match.domain.value_objects.resolution import Resolution
from memory_match.domain.value_objects.tap_outcome import TapOutcome

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[int], None]


class InvalidCardIdError(LookupError):
    """Raised when a card id does not exist in the session."""

    def __init__(self, card_id: int):
        self.card_id = card_id
        super().__init__(f"Card {card_id} not found")


class MemoryGame:
    """State machine for a single memory game session.

    Responsibilities:
    - Revealing cards on tap and collecting the two-card selection
    - Scheduling the delayed, cancellable resolution of a full selection
    - Score and move counting
    - Reporting the final score exactly once on completion

    All mutation happens on the event loop thread; the only asynchronous
    step is the resolution timer.
    """

    def __init__(
        self,
        cards: Sequence[Card],
        *,
        evaluation_delay_ms: int = EVALUATION_DELAY_MS,
        match_reward: int = MATCH_REWARD,
        on_complete: CompletionCallback | None = None,
        auto_resolve: bool = True,
        session_id: str | None = None,
    ):
        """Initialize a game from a dealt deck.

        Args:
            cards: Deck to play, ids must be unique
            evaluation_delay_ms: How long a full selection stays revealed
            match_reward: Points added per matched pair
            on_complete: Called with the final score when every pair is matched
            auto_resolve: Schedule resolve() on the running event loop. When
                False the caller drives resolve() itself.
            session_id: Identifier for the session (generated if omitted)

        Raises:
            ValueError: If the deck is empty or ids repeat
        """
        if not cards:
            raise ValueError("Cannot start a game without cards")

        self._cards: dict[int, Card] = {card.id: card for card in cards}
        if len(self._cards) != len(cards):
            raise ValueError("Card ids must be unique within a session")

        self.session_id = session_id or str(uuid4())
        self._evaluation_delay_ms = evaluation_delay_ms
        self._match_reward = match_reward
        self._on_complete = on_complete
        self._auto_resolve = auto_resolve

        self._selection: list[int] = []
        self._score = 0
        self._moves = 0
        self._checking = False
        self._state = GameState.IDLE
        self._pending: asyncio.Task | None = None
        self._completion_reported = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def cards(self) -> tuple[Card, ...]:
        """Current revision of every card, in grid order."""
        return tuple(self._cards.values())

    @property
    def selection(self) -> tuple[Card, ...]:
        """Face-up cards awaiting evaluation, in tap order."""
        return tuple(self._cards[card_id] for card_id in self._selection)

    @property
    def score(self) -> int:
        return self._score

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def checking(self) -> bool:
        """True while a full selection waits for resolution."""
        return self._checking

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._state is GameState.COMPLETE

    @property
    def remaining_pairs(self) -> int:
        """Number of pairs still in play."""
        in_play = sum(1 for card in self._cards.values() if card.in_play)
        return in_play // CARDS_PER_PAIR

    @property
    def evaluation_delay_ms(self) -> int:
        return self._evaluation_delay_ms

    def get_card(self, card_id: int) -> Card:
        """Get the current revision of a card.

        Raises:
            InvalidCardIdError: If no card has that id
        """
        try:
            return self._cards[card_id]
        except KeyError:
            raise InvalidCardIdError(card_id) from None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def tap(self, card_id: int) -> TapOutcome:
        """Reveal a card.

        Invalid taps are ignored and reported through the outcome; the
        game state is untouched.

        Args:
            card_id: Id of the tapped card

        Returns:
            TapOutcome describing what the tap did

        Raises:
            RuntimeError: If the tap completes a pair with auto_resolve
                enabled and no event loop is running
        """
        if self._state.is_terminal():
            return TapOutcome.FINISHED

        try:
            card = self.get_card(card_id)
        except InvalidCardIdError as e:
            logger.warning(f"Ignoring tap in session {self.session_id}: {e}")
            return TapOutcome.INVALID_CARD

        if len(self._selection) == CARDS_PER_PAIR or self._checking:
            return TapOutcome.BUSY
        if not card.in_play:
            return TapOutcome.NOT_IN_PLAY
        # Also rejects a second tap on the card already in the selection
        if card.face_up:
            return TapOutcome.ALREADY_FACE_UP

        completes_pair = len(self._selection) == CARDS_PER_PAIR - 1
        if completes_pair and self._auto_resolve:
            # The task cannot start before this synchronous call returns
            self._schedule_resolution()

        self._cards[card_id] = card.flipped_up()
        self._selection.append(card_id)
        logger.debug(f"Session {self.session_id}: revealed card {card_id} ({card.image_key})")

        if not completes_pair:
            self._state = GameState.ONE_SELECTED
            return TapOutcome.ACCEPTED

        self._checking = True
        self._state = GameState.EVALUATING
        return TapOutcome.PAIR_SELECTED

    def resolve(self) -> Resolution | None:
        """Evaluate the two selected cards.

        A match scores the reward and takes both cards out of play; a
        mismatch flips both back. Either way the move counter advances and
        the selection is cleared. Calling this while the timer is pending
        cancels the timer.

        Returns:
            Resolution, or None if no pair is awaiting evaluation
        """
        if self._state is not GameState.EVALUATING:
            return None

        self._cancel_pending()

        first, second = (self._cards[card_id] for card_id in self._selection)
        matched = first.image_key == second.image_key

        self._moves += 1
        if matched:
            self._score += self._match_reward
            transition = Card.removed
        else:
            transition = Card.flipped_down
        for card in (first, second):
            self._cards[card.id] = transition(card)

        self._selection.clear()
        self._checking = False
        self._state = GameState.IDLE

        logger.debug(
            f"Session {self.session_id}: move {self._moves} "
            f"cards ({first.id}, {second.id}) matched={matched} score={self._score}"
        )

        completed = self._check_completion()
        return Resolution(
            card_ids=(first.id, second.id),
            matched=matched,
            score=self._score,
            moves=self._moves,
            completed=completed,
        )

    def abort(self) -> bool:
        """End the session early without reporting a score.

        Cancels a pending resolution. Safe to call repeatedly and after the
        timer has already fired.

        Returns:
            True if the game was running and is now aborted
        """
        self._cancel_pending()

        if self._state.is_terminal():
            return False

        self._selection.clear()
        self._checking = False
        self._state = GameState.ABORTED
        logger.info(f"Session {self.session_id} aborted (score={self._score}, moves={self._moves})")
        return True

    async def wait_for_resolution(self) -> None:
        """Wait until a scheduled resolution has run or been cancelled."""
        task = self._pending
        if task is not None:
            await asyncio.wait({task})

    def to_dict(self) -> dict:
        """Convert game state to dictionary for serialization."""
        return {
            "session_id": self.session_id,
            "state": self._state.value,
            "score": self._score,
            "moves": self._moves,
            "checking": self._checking,
            "is_complete": self.is_complete,
            "remaining_pairs": self.remaining_pairs,
            "cards": [card.to_dict() for card in self._cards.values()],
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _schedule_resolution(self) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._resolve_after_delay(), name=f"resolve-{self.session_id}")
        task.add_done_callback(self._on_timer_done)
        self._pending = task

    async def _resolve_after_delay(self) -> None:
        await asyncio.sleep(self._evaluation_delay_ms / 1000)
        # Fired: nothing left to cancel
        self._pending = None
        self.resolve()

    def _on_timer_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            logger.debug(f"Resolution timer for session {self.session_id} was cancelled")
        elif task.exception() is not None:
            logger.error(f"Resolution for session {self.session_id} failed: {task.exception()}")

    def _cancel_pending(self) -> None:
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            task.cancel()

    def _check_completion(self) -> bool:
        if any(card.in_play for card in self._cards.values()):
            return False

        self._state = GameState.COMPLETE
        if not self._completion_reported:
            self._completion_reported = True
            logger.info(
                f"Session {self.session_id} complete (score={self._score}, moves={self._moves})"
            )
            if self._on_complete is not None:
                try:
                    self._on_complete(self._score)
                except Exception:
                    logger.exception(
                        f"Failed to report completion of session {self.session_id} "
                        f"(score={self._score})"
                    )
                    raise
        return True
