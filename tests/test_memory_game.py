import asyncio

import pytest

from memory_match.domain.services.memory_game import InvalidCardIdError, MemoryGame
from memory_match.domain.value_objects.game_state import GameState
from memory_match.domain.value_objects.tap_outcome import TapOutcome
from tests.conftest import make_cards


def manual_game(*image_keys, **kwargs):
    return MemoryGame(make_cards(*image_keys), auto_resolve=False, **kwargs)


# =============================================================================
# Taps
# =============================================================================


def test_new_game_is_idle():
    game = manual_game("bee", "bee")

    assert game.state is GameState.IDLE
    assert game.score == 0
    assert game.moves == 0
    assert not game.checking
    assert game.selection == ()
    assert game.remaining_pairs == 1


def test_first_tap_reveals_card():
    game = manual_game("bee", "lion", "bee", "lion")

    assert game.tap(2) is TapOutcome.ACCEPTED

    assert game.get_card(2).face_up
    assert game.state is GameState.ONE_SELECTED
    assert [card.id for card in game.selection] == [2]


def test_second_tap_starts_evaluation():
    game = manual_game("bee", "lion", "bee", "lion")
    game.tap(0)

    assert game.tap(1) is TapOutcome.PAIR_SELECTED

    assert game.state is GameState.EVALUATING
    assert game.checking
    assert [card.id for card in game.selection] == [0, 1]


def test_tapping_same_card_twice_is_ignored():
    game = manual_game("bee", "lion", "bee", "lion")
    game.tap(0)

    assert game.tap(0) is TapOutcome.ALREADY_FACE_UP

    assert len(game.selection) == 1
    assert game.state is GameState.ONE_SELECTED


def test_third_tap_while_checking_is_dropped():
    game = manual_game("bee", "lion", "bee", "lion")
    game.tap(0)
    game.tap(1)

    assert game.tap(2) is TapOutcome.BUSY

    assert not game.get_card(2).face_up
    assert len(game.selection) == 2


def test_tap_on_matched_card_is_ignored():
    game = manual_game("bee", "bee", "lion", "lion")
    game.tap(0)
    game.tap(1)
    game.resolve()

    assert game.tap(0) is TapOutcome.NOT_IN_PLAY
    assert game.selection == ()


def test_unknown_card_id_is_reported_not_raised(caplog):
    game = manual_game("bee", "bee")
    before = game.to_dict()

    assert game.tap(42) is TapOutcome.INVALID_CARD

    assert game.to_dict() == before
    assert "Card 42 not found" in caplog.text


def test_get_card_raises_for_unknown_id():
    game = manual_game("bee", "bee")

    with pytest.raises(InvalidCardIdError) as exc_info:
        game.get_card(-1)

    assert exc_info.value.card_id == -1


def test_tap_outcome_reports_state_change():
    assert TapOutcome.ACCEPTED.changed_state
    assert TapOutcome.PAIR_SELECTED.changed_state
    assert not TapOutcome.BUSY.changed_state
    assert not TapOutcome.INVALID_CARD.changed_state


# =============================================================================
# Resolution
# =============================================================================


def test_match_scores_reward_and_removes_pair():
    game = manual_game("bee", "lion", "bee", "lion", match_reward=20)
    game.tap(0)
    game.tap(2)

    resolution = game.resolve()

    assert resolution.matched
    assert resolution.card_ids == (0, 2)
    assert game.score == 20
    assert game.moves == 1
    assert not game.get_card(0).in_play
    assert not game.get_card(2).in_play
    assert game.selection == ()
    assert not game.checking
    assert game.state is GameState.IDLE


def test_mismatch_flips_cards_back():
    game = manual_game("bee", "lion", "bee", "lion")
    game.tap(0)
    game.tap(1)

    resolution = game.resolve()

    assert not resolution.matched
    assert game.score == 0
    assert game.moves == 1
    assert not game.get_card(0).face_up
    assert not game.get_card(1).face_up
    assert game.get_card(0).in_play
    assert game.selection == ()


def test_moves_count_every_resolution():
    game = manual_game("bee", "lion", "bee", "lion")

    for first, second in [(0, 1), (0, 3), (0, 2)]:
        game.tap(first)
        game.tap(second)
        game.resolve()

    assert game.moves == 3
    assert game.score == 20


def test_resolve_without_pair_is_noop():
    game = manual_game("bee", "bee")
    game.tap(0)

    assert game.resolve() is None
    assert game.moves == 0


def test_custom_match_reward():
    game = manual_game("bee", "bee", match_reward=7)
    game.tap(0)
    game.tap(1)
    game.resolve()

    assert game.score == 7


# =============================================================================
# Completion
# =============================================================================


def test_completion_reports_score_once():
    reported = []
    game = manual_game("bee", "lion", "lion", "bee", on_complete=reported.append)

    game.tap(1)
    game.tap(2)
    assert not game.resolve().completed
    game.tap(0)
    game.tap(3)
    resolution = game.resolve()

    assert resolution.completed
    assert game.is_complete
    assert game.state is GameState.COMPLETE
    assert game.remaining_pairs == 0
    assert reported == [40]

    assert game.resolve() is None
    assert game.tap(0) is TapOutcome.FINISHED
    assert reported == [40]


def test_abort_stops_game_without_reporting():
    reported = []
    game = manual_game("bee", "bee", on_complete=reported.append)
    game.tap(0)
    game.tap(1)

    assert game.abort()

    assert game.state is GameState.ABORTED
    assert game.resolve() is None
    assert game.tap(0) is TapOutcome.FINISHED
    assert reported == []


def test_abort_is_idempotent():
    game = manual_game("bee", "bee")

    assert game.abort()
    assert not game.abort()


def test_empty_deck_rejected():
    with pytest.raises(ValueError):
        MemoryGame([])


def test_duplicate_ids_rejected():
    cards = make_cards("bee", "bee")
    with pytest.raises(ValueError):
        MemoryGame(cards + cards[:1])


def test_to_dict_snapshot():
    game = manual_game("bee", "bee", session_id="s-1")
    game.tap(1)

    data = game.to_dict()

    assert data["session_id"] == "s-1"
    assert data["state"] == "one_selected"
    assert data["cards"][1] == {"id": 1, "image_key": "bee", "face_up": True, "in_play": True}


# =============================================================================
# Timed resolution
# =============================================================================


async def test_pair_resolves_after_delay():
    reported = []
    game = MemoryGame(
        make_cards("bee", "bee"),
        evaluation_delay_ms=10,
        match_reward=20,
        on_complete=reported.append,
    )

    game.tap(0)
    game.tap(1)
    assert game.checking

    await game.wait_for_resolution()

    assert not game.get_card(0).in_play
    assert not game.get_card(1).in_play
    assert game.moves == 1
    assert game.score == 20
    assert game.is_complete
    assert reported == [20]


async def test_pair_stays_revealed_until_delay_elapses():
    game = MemoryGame(make_cards("bee", "lion", "bee", "lion"), evaluation_delay_ms=200)

    game.tap(0)
    game.tap(1)
    await asyncio.sleep(0.01)

    assert game.checking
    assert game.get_card(0).face_up
    assert game.moves == 0

    game.abort()


async def test_abort_cancels_pending_resolution():
    reported = []
    game = MemoryGame(
        make_cards("bee", "bee"),
        evaluation_delay_ms=20,
        on_complete=reported.append,
    )
    game.tap(0)
    game.tap(1)

    game.abort()
    await asyncio.sleep(0.05)

    assert game.state is GameState.ABORTED
    assert game.moves == 0
    assert game.get_card(0).in_play
    assert reported == []


async def test_abort_after_timer_fired_does_not_fail():
    game = MemoryGame(make_cards("bee", "lion", "bee", "lion"), evaluation_delay_ms=0)
    game.tap(0)
    game.tap(1)
    await game.wait_for_resolution()

    assert game.moves == 1
    assert game.abort()
    assert not game.abort()


async def test_manual_resolve_cancels_timer():
    game = MemoryGame(make_cards("bee", "lion", "bee", "lion"), evaluation_delay_ms=20)
    game.tap(0)
    game.tap(1)

    game.resolve()
    await asyncio.sleep(0.05)

    assert game.moves == 1


async def test_wait_without_pending_timer_returns():
    game = MemoryGame(make_cards("bee", "bee"))

    await game.wait_for_resolution()

    assert game.state is GameState.IDLE


def test_auto_resolve_needs_running_loop():
    game = MemoryGame(make_cards("bee", "bee"))
    game.tap(0)

    with pytest.raises(RuntimeError):
        game.tap(1)

    assert not game.get_card(1).face_up
    assert len(game.selection) == 1
    assert not game.checking


def test_failed_completion_report_is_logged(caplog):
    def reject(score):
        raise RuntimeError("board unavailable")

    game = manual_game("bee", "bee", on_complete=reject, session_id="s-9")
    game.tap(0)
    game.tap(1)

    with pytest.raises(RuntimeError):
        game.resolve()

    assert "Failed to report completion of session s-9 (score=20)" in caplog.text
    assert game.is_complete
    assert game.resolve() is None
