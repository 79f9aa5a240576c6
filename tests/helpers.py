"""Shortcuts shared by the engine tests."""

from dataclasses import replace

from ratopoly.game.board import HELL_ENTRY
from ratopoly.game.engine import (
    apply_after_effects,
    apply_movement,
    finish_pre_move,
    record_roll,
    resolve_current_space,
)
from ratopoly.game.spaces import BoardPosition
from ratopoly.game.state import Phase


def place(state, player_id, board_id="surface", index=0, **changes):
    """Move a participant to a space (and tweak fields) without resolving anything."""
    return state.update_player(
        player_id,
        lambda p: replace(p.moved_to(BoardPosition(board_id, index)), **changes),
    )


def put_in_hell(state, player_id, attempts=0, **changes):
    """Put a participant in hell with ``attempts`` failed escapes behind them."""
    return state.update_player(
        player_id,
        lambda p: replace(p.moved_to(HELL_ENTRY), in_hell=True, hell_escapes=attempts, **changes),
    )


def act_as(state, player_id, phase=Phase.PRE_MOVE):
    """Make ``player_id`` the active participant in ``phase``."""
    index = next(i for i, p in enumerate(state.players) if p.player_id == player_id)
    return replace(state, current_player_index=index, phase=phase)


def roll_and_move(state, roll):
    """Drive the active participant from pre-move to resolve with a given die value."""
    state = finish_pre_move(state)
    state = record_roll(state, roll)
    return apply_movement(state)


def land(state, roll):
    """Roll, move and resolve the landed space."""
    return resolve_current_space(roll_and_move(state, roll))


def full_turn(state, roll):
    """Roll, move, resolve and pass the turn (no lotto on the way)."""
    return apply_after_effects(land(state, roll))
