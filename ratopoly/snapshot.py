"""
Public snapshot serialization of GameState.

Produces a read-only, UI-friendly view of the current game without
exposing hidden information (e.g., deck order).
"""

from __future__ import annotations

from typing import Any, Dict, List

from ratopoly.game.board import find_property
from ratopoly.game.state import GameState


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - phase, turn_number, current_player_id and game status
    - players with public info (rubbies, indulgences, position, hell status)
    - board occupancy (which participants stand on which space)
    - jackpot, lotto sub-state and last roll
    - deck counts (remaining / discard) only
    - the narrative log
    """
    players: List[Dict[str, Any]] = []
    for index, pstate in enumerate(game.players):
        players.append(
            {
                "player_id": pstate.player_id,
                "name": pstate.name,
                "is_active": index == game.current_player_index,
                "rubbies": pstate.rubbies,
                "indulgences": pstate.indulgences,
                "alive": pstate.alive,
                "board_id": pstate.board_id,
                "space_index": pstate.space_index,
                "in_hell": pstate.in_hell,
                "hell_escapes": pstate.hell_escapes,
                "job_protected": pstate.job_protected,
                "properties": [
                    {
                        "property_id": pid,
                        "name": find_property(game.boards, pid).name,
                        "purchase_price": pstate.purchase_price(pid),
                    }
                    for pid in sorted(pstate.owned_properties)
                ],
            }
        )

    boards: List[Dict[str, Any]] = []
    for board in game.boards:
        spaces = []
        for index, space in enumerate(board.spaces):
            owner = game.owner_of(space.space_id) if space.property is not None else None
            spaces.append(
                {
                    "index": index,
                    "space_id": space.space_id,
                    "name": space.name,
                    "type": space.space_type.value,
                    "owner_id": owner.player_id if owner else None,
                    "occupants": [
                        p.player_id
                        for p in game.players
                        if p.alive and p.board_id == board.board_id and p.space_index == index
                    ],
                }
            )
        boards.append(
            {"board_id": board.board_id, "name": board.name, "kind": board.kind.value, "spaces": spaces}
        )

    lotto = None
    if game.lotto is not None:
        lotto = {"status": game.lotto.status.value, "called_face": game.lotto.called_face}

    win = None
    if game.status.win is not None:
        win = {"winner_id": game.status.win.winner_id, "reason": game.status.win.reason.value}

    return {
        "phase": game.phase.value,
        "turn_number": game.turn_number,
        "current_player_id": game.current_player.player_id,
        "status": {"state": game.status.state.value, "win": win},
        "last_roll": game.last_roll,
        "jackpot": game.jackpot,
        "lotto": lotto,
        "pending_card": game.pending_card.description if game.pending_card else None,
        "players": players,
        "boards": boards,
        "deck": {
            "cards_remaining": len(game.deck),
            "discard_count": len(game.discard),
        },
        "log": [str(event) for event in game.log],
    }
