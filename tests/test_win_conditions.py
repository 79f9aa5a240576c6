"""
Tests for win detection and its precedence.
"""

from dataclasses import replace

from helpers import land, place
from ratopoly.game import GameConfig, check_win_conditions, create_game
from ratopoly.game.events import EventType
from ratopoly.game.rules import get_legal_actions
from ratopoly.game.state import GameStatusState, Phase, WinReason


def _kill(game, player_id):
    return game.update_player(player_id, lambda p: replace(p, alive=False))


def test_no_winner_at_start(two_player_game):
    assert check_win_conditions(two_player_game) is two_player_game


def test_last_rat_standing(three_player_game):
    game = _kill(_kill(three_player_game, "player-1"), "player-3")
    game = check_win_conditions(game)

    assert game.status.state == GameStatusState.OVER
    assert game.winner.winner_id == "player-2"
    assert game.winner.reason == WinReason.LAST_RAT
    assert game.log[-1].event_type == EventType.GAME_END


def test_last_rat_beats_wealth(two_player_game):
    game = two_player_game.update_player("player-2", lambda p: replace(p, rubbies=5000))
    game = check_win_conditions(_kill(game, "player-1"))
    assert game.winner.reason == WinReason.LAST_RAT


def test_indulgences_beat_wealth_regardless_of_seat(two_player_game):
    game = two_player_game.update_player("player-1", lambda p: replace(p, rubbies=3000))
    game = game.update_player("player-2", lambda p: replace(p, indulgences=3))
    game = check_win_conditions(game)

    assert game.winner.winner_id == "player-2"
    assert game.winner.reason == WinReason.INDULGENCES


def test_dead_participants_cannot_win(three_player_game):
    game = three_player_game.update_player(
        "player-1", lambda p: replace(p, alive=False, indulgences=3)
    )
    assert not check_win_conditions(game).is_over


def test_third_indulgence_wins_on_resolve(two_player_game):
    game = place(two_player_game, "player-1", indulgences=2)
    game = land(game, 1)

    assert game.is_over
    assert game.phase == Phase.GAME_OVER
    assert game.winner.reason == WinReason.INDULGENCES


def test_wealth_threshold_wins_on_resolve(two_player_game):
    game = place(two_player_game, "player-1", "surface", 2, rubbies=2900)
    game = land(game, 3)
    assert game.winner.reason == WinReason.WEALTH
    assert game.winner.winner_id == "player-1"


def test_thresholds_come_from_config():
    game = create_game(["A", "B"], GameConfig(wealth_win=500))
    game = game.update_player("player-2", lambda p: replace(p, rubbies=500))
    assert check_win_conditions(game).winner.reason == WinReason.WEALTH


def test_game_over_is_permanent(two_player_game):
    over = check_win_conditions(_kill(two_player_game, "player-2"))
    revived = over.update_player("player-2", lambda p: replace(p, alive=True))

    assert check_win_conditions(revived) is revived
    assert revived.is_over
    assert get_legal_actions(over) == []
