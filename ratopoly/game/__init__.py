from ratopoly.game.config import GameConfig
from ratopoly.game.engine import (
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
from ratopoly.game.player import PlayerState
from ratopoly.game.setup import create_game
from ratopoly.game.state import GameState, Phase, WinReason

__all__ = [
    "GameConfig",
    "GameState",
    "Phase",
    "PlayerState",
    "WinReason",
    "create_game",
    "begin_pre_move",
    "finish_pre_move",
    "resolve_hell_escape",
    "record_roll",
    "apply_movement",
    "resolve_current_space",
    "take_go_payout",
    "place_go_wager",
    "resolve_go_lotto_roll",
    "apply_after_effects",
    "check_win_conditions",
]
