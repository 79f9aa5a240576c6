"""
Tests for agent implementations.
"""

from helpers import put_in_hell
from ratopoly.agents import HeuristicAgent, RandomAgent, apply_decision
from ratopoly.game import finish_pre_move
from ratopoly.game.rules import ActionType, get_legal_actions


def test_heuristic_agent_is_deterministic_per_seat(two_player_game):
    game = finish_pre_move(two_player_game)
    first = HeuristicAgent("player-1", "Alice").decide(game)
    second = HeuristicAgent("player-1", "Alice").decide(game)
    assert first == second


def test_heuristic_agent_steers_roll(two_player_game):
    game = finish_pre_move(two_player_game)
    decision = HeuristicAgent("player-1", "Alice", seed=3, steer=True).decide(game)
    assert decision.roll == 4


def test_heuristic_agent_role(two_player_game):
    agent = HeuristicAgent("player-1", "Alice")
    assert agent.role(put_in_hell(two_player_game, "player-1")) == "Survival mode"
    assert repr(agent) == "HeuristicAgent(id=player-1, name='Alice')"


def test_random_agent_prefers_finishing_pre_move(two_player_game):
    decision = RandomAgent("player-1", "Alice", seed=1).decide(two_player_game)
    assert decision.kind == ActionType.FINISH_PRE_MOVE


def test_random_agent_only_picks_legal_actions(two_player_game):
    agent = RandomAgent("player-1", "Alice", seed=4)
    game = two_player_game
    for _ in range(4):
        decision = agent.decide(game)
        assert decision.kind in [a.action_type for a in get_legal_actions(game)]
        game = apply_decision(game, decision)


def test_random_agent_supplies_inputs(two_player_game):
    game = finish_pre_move(two_player_game)
    decision = RandomAgent("player-1", "Alice", seed=9).decide(game)
    assert decision.kind == ActionType.ROLL
    assert 1 <= decision.roll <= 6
