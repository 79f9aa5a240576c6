"""
Tests for hell escape attempts, indulgences and the firing squad.
"""

import pytest

from helpers import put_in_hell
from ratopoly.exceptions import ValidationError
from ratopoly.game import apply_after_effects, finish_pre_move, resolve_hell_escape
from ratopoly.game.events import EventType
from ratopoly.game.state import Phase, WinReason


@pytest.fixture
def alice_in_hell(three_player_game):
    return put_in_hell(three_player_game, "player-1")


def test_pre_move_routes_to_hell_escape(alice_in_hell):
    assert finish_pre_move(alice_in_hell).phase == Phase.HELL_ESCAPE


def test_first_attempt_needs_a_six(alice_in_hell):
    game = resolve_hell_escape(finish_pre_move(alice_in_hell), roll=5)
    alice = game.current_player

    assert alice.in_hell
    assert alice.hell_escapes == 1
    assert game.phase == Phase.AFTER_EFFECTS
    assert game.log[-1].event_type == EventType.HELL_ATTEMPT


def test_failed_attempt_ends_turn(alice_in_hell):
    game = resolve_hell_escape(finish_pre_move(alice_in_hell), roll=1)
    game = apply_after_effects(game)
    assert game.current_player.player_id == "player-2"
    assert game.get_player("player-1").in_hell


@pytest.mark.parametrize("attempts,roll", [(0, 6), (1, 5), (2, 4)])
def test_escape_thresholds(three_player_game, attempts, roll):
    """Attempts 1, 2 and 3 need at least 6, 5 and 4."""
    game = put_in_hell(three_player_game, "player-1", attempts=attempts)
    game = resolve_hell_escape(finish_pre_move(game), roll=roll)
    alice = game.current_player

    assert not alice.in_hell
    assert alice.hell_escapes == 0
    assert str(alice.position) == "surface:0"
    assert game.phase == Phase.ROLL


@pytest.mark.parametrize("attempts,roll", [(1, 4), (2, 3)])
def test_rolls_below_threshold_fail(three_player_game, attempts, roll):
    game = put_in_hell(three_player_game, "player-1", attempts=attempts)
    game = resolve_hell_escape(finish_pre_move(game), roll=roll)
    assert game.current_player.in_hell
    assert game.current_player.hell_escapes == attempts + 1


def test_fourth_attempt_succeeds_on_four(three_player_game):
    game = put_in_hell(three_player_game, "player-1", attempts=3)
    game = resolve_hell_escape(finish_pre_move(game), roll=4, firing_squad_survives=False)
    assert game.current_player.alive
    assert not game.current_player.in_hell


def test_indulgence_releases_without_a_roll(three_player_game):
    game = put_in_hell(three_player_game, "player-1", attempts=2, indulgences=1)
    game = resolve_hell_escape(finish_pre_move(game))
    alice = game.current_player

    assert not alice.in_hell
    assert alice.indulgences == 0
    assert alice.hell_escapes == 0
    assert game.phase == Phase.ROLL
    assert not any(e.event_type == EventType.HELL_ATTEMPT for e in game.log)


def test_roll_required_without_indulgence(alice_in_hell):
    with pytest.raises(ValidationError):
        resolve_hell_escape(finish_pre_move(alice_in_hell))


def test_firing_squad_execution(three_player_game):
    """Attempt 4 fails, coin says fall: dead, jackpot gets balance + 1000."""
    game = put_in_hell(three_player_game, "player-1", attempts=3)
    game = game.update_player("player-1", lambda p: p.with_property("property-a", 220))
    game = resolve_hell_escape(finish_pre_move(game), roll=2, firing_squad_survives=False)
    alice = game.get_player("player-1")

    assert not alice.alive
    assert alice.rubbies == 0
    assert alice.indulgences == 0
    assert not alice.owned_properties
    assert game.jackpot == 1300
    assert game.current_player.player_id == "player-2"
    assert game.phase == Phase.PRE_MOVE
    assert not game.is_over
    assert EventType.DEATH in [e.event_type for e in game.log]


def test_firing_squad_survivor_returns_to_start(three_player_game):
    game = put_in_hell(three_player_game, "player-1", attempts=3)
    game = resolve_hell_escape(finish_pre_move(game), roll=1, firing_squad_survives=True)
    alice = game.current_player

    assert alice.alive
    assert not alice.in_hell
    assert str(alice.position) == "surface:0"
    assert game.phase == Phase.AFTER_EFFECTS


def test_missing_coin_counts_as_not_surviving(three_player_game):
    game = put_in_hell(three_player_game, "player-1", attempts=3)
    game = resolve_hell_escape(finish_pre_move(game), roll=1)
    assert not game.get_player("player-1").alive


def test_execution_of_second_to_last_rat_ends_game(two_player_game):
    game = put_in_hell(two_player_game, "player-1", attempts=3)
    game = resolve_hell_escape(finish_pre_move(game), roll=1, firing_squad_survives=False)

    assert game.is_over
    assert game.phase == Phase.GAME_OVER
    assert game.winner.winner_id == "player-2"
    assert game.winner.reason == WinReason.LAST_RAT
    assert game.current_player.player_id == "player-2"
    assert game.current_player.alive
