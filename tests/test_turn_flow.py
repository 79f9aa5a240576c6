"""
Tests for the turn state machine: phase order, wrong-phase no-ops, movement.
"""

from dataclasses import replace

import pytest

from helpers import act_as, land, place, roll_and_move
from ratopoly.exceptions import ValidationError
from ratopoly.game import (
    apply_after_effects,
    apply_movement,
    begin_pre_move,
    check_win_conditions,
    finish_pre_move,
    place_go_wager,
    record_roll,
    resolve_current_space,
    resolve_go_lotto_roll,
    resolve_hell_escape,
    take_go_payout,
)
from ratopoly.game.events import EventType
from ratopoly.game.state import Phase


def test_phases_progress_in_order(two_player_game):
    """pre-move -> roll -> move -> resolve -> after-effects -> next pre-move."""
    game = finish_pre_move(two_player_game)
    assert game.phase == Phase.ROLL

    game = record_roll(game, 3)
    assert game.phase == Phase.MOVE
    assert game.last_roll == 3

    game = apply_movement(game)
    assert game.phase == Phase.RESOLVE
    assert game.current_player.space_index == 3

    game = resolve_current_space(game)
    assert game.phase == Phase.AFTER_EFFECTS

    game = apply_after_effects(game)
    assert game.phase == Phase.PRE_MOVE
    assert game.current_player.player_id == "player-2"
    assert game.turn_number == 1
    assert game.last_roll is None
    assert game.log[-1].event_type == EventType.TURN_START


def test_begin_pre_move_resets_turn_scratch(two_player_game):
    game = replace(two_player_game, last_roll=4)
    assert begin_pre_move(game).last_roll is None


@pytest.mark.parametrize(
    "operation",
    [
        lambda s: record_roll(s, 3),
        apply_movement,
        resolve_current_space,
        take_go_payout,
        lambda s: place_go_wager(s, 2),
        lambda s: resolve_go_lotto_roll(s, 2),
        lambda s: resolve_hell_escape(s, 6),
        apply_after_effects,
    ],
)
def test_wrong_phase_calls_return_input_unchanged(two_player_game, operation):
    """Every operation outside its phase is a no-op returning the same snapshot."""
    assert operation(two_player_game) is two_player_game


def test_calls_after_game_over_are_ignored(two_player_game):
    game = two_player_game.update_player("player-2", lambda p: replace(p, alive=False))
    over = check_win_conditions(game)
    assert over.is_over
    assert over.phase == Phase.GAME_OVER
    assert finish_pre_move(over) is over
    assert begin_pre_move(over) is over


def test_snapshots_are_not_mutated(two_player_game):
    before = two_player_game
    after = land(before, 3)
    assert before.players[0].rubbies == 300
    assert not before.players[0].owned_properties
    assert after.players[0].rubbies == 80
    # Untouched parts are shared between snapshots.
    assert after.boards is before.boards
    assert after.players[1] is before.players[1]


@pytest.mark.parametrize("bad_roll", [0, 7, -1, True, 2.5, None])
def test_invalid_die_value_is_rejected(two_player_game, bad_roll):
    game = finish_pre_move(two_player_game)
    with pytest.raises(ValidationError):
        record_roll(game, bad_roll)


def test_movement_wraps_surface_and_marks_passing_start(two_player_game):
    game = place(two_player_game, "player-1", "surface", 8)
    game = roll_and_move(game, 4)
    player = game.current_player
    assert player.space_index == 2
    assert player.passed_start


def test_landing_exactly_on_start_counts_as_passing(two_player_game):
    game = place(two_player_game, "player-1", "surface", 7)
    game = roll_and_move(game, 3)
    assert game.current_player.space_index == 0
    assert game.current_player.passed_start


def test_movement_wraps_subsurface_without_passing_start(two_player_game):
    game = place(two_player_game, "player-1", "subsurface", 3)
    game = roll_and_move(game, 3)
    player = game.current_player
    assert (player.board_id, player.space_index) == ("subsurface", 1)
    assert not player.passed_start


def test_turn_skips_dead_participants(three_player_game):
    game = three_player_game.update_player("player-2", lambda p: replace(p, alive=False))
    game = act_as(game, "player-1", Phase.AFTER_EFFECTS)
    game = apply_after_effects(game)
    assert game.current_player.player_id == "player-3"


def test_turn_order_wraps_to_first(three_player_game):
    game = act_as(three_player_game, "player-3", Phase.AFTER_EFFECTS)
    game = apply_after_effects(game)
    assert game.current_player.player_id == "player-1"
