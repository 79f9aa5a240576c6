"""
Tests for the action vocabulary and dispatch.
"""

import pytest

from helpers import put_in_hell
from ratopoly.exceptions import InvalidActionError
from ratopoly.game.rules import Action, ActionType, apply_action, get_legal_actions, is_legal
from ratopoly.game.state import Phase


def test_legal_actions_in_pre_move(two_player_game):
    actions = get_legal_actions(two_player_game)
    assert actions == [Action(ActionType.FINISH_PRE_MOVE), Action(ActionType.BEGIN)]


def test_apply_action_walks_a_turn(two_player_game):
    game = apply_action(two_player_game, Action(ActionType.FINISH_PRE_MOVE))
    assert is_legal(game, ActionType.ROLL)
    assert not is_legal(game, ActionType.MOVE)

    game = apply_action(game, Action(ActionType.ROLL, roll=3))
    game = apply_action(game, Action(ActionType.MOVE))
    game = apply_action(game, Action(ActionType.RESOLVE))
    assert game.current_player.owns("property-a")
    assert game.phase == Phase.AFTER_EFFECTS


def test_illegal_action_is_a_no_op(two_player_game):
    assert apply_action(two_player_game, Action(ActionType.MOVE)) is two_player_game


def test_unrelated_params_are_ignored(two_player_game):
    game = apply_action(two_player_game, Action(ActionType.FINISH_PRE_MOVE, roll=4))
    assert game.phase == Phase.ROLL
    assert game.last_roll is None


def test_hell_escape_action_passes_coin_flip(two_player_game):
    game = put_in_hell(two_player_game, "player-1", attempts=3)
    game = apply_action(game, Action(ActionType.FINISH_PRE_MOVE))
    game = apply_action(game, Action(ActionType.HELL_ESCAPE, roll=1, firing_squad_survives=True))
    assert game.get_player("player-1").alive


def test_unknown_action_raises(two_player_game):
    with pytest.raises(InvalidActionError):
        apply_action(two_player_game, Action("teleport-home"))
