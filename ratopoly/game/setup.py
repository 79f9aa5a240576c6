"""
Session initializer.
"""

import logging
from typing import List, Optional, Sequence

from ratopoly.exceptions import ValidationError
from ratopoly.game.board import SURFACE_START, create_standard_boards
from ratopoly.game.cards import DEFAULT_DECK, Card
from ratopoly.game.config import GameConfig
from ratopoly.game.events import EventType
from ratopoly.game.player import PlayerState
from ratopoly.game.state import GameState, Phase

logger = logging.getLogger(__name__)


def _build_players(names: Sequence[str], config: GameConfig) -> List[PlayerState]:
    return [
        PlayerState(
            player_id=f"player-{index + 1}",
            name=name,
            rubbies=config.starting_rubbies,
            board_id=SURFACE_START.board_id,
            space_index=SURFACE_START.index,
        )
        for index, name in enumerate(names)
    ]


def create_game(
    names: Sequence[str],
    config: Optional[GameConfig] = None,
    deck: Optional[Sequence[Card]] = None,
) -> GameState:
    """
    Create a new session with every participant on the surface start space.

    Args:
        names: Display names, in turn order (2 or more).
        config: Rules constants. Defaults to ``GameConfig()``.
        deck: Card order to draw from. Defaults to the standard deck in its
            printed order; shuffle it with ``shuffle_cards`` beforehand for a
            random game.

    Returns:
        Initialized GameState in the ``pre-move`` phase.

    Raises:
        ValidationError: fewer than the minimum participants, or a blank name.
    """
    config = config or GameConfig()
    cleaned = [name.strip() for name in names]
    if len(cleaned) < config.min_players:
        raise ValidationError(f"Game requires at least {config.min_players} players")
    if any(not name for name in cleaned):
        raise ValidationError("Player names must not be blank")

    state = GameState(
        boards=create_standard_boards(),
        deck=tuple(deck) if deck is not None else DEFAULT_DECK,
        players=tuple(_build_players(cleaned, config)),
        config=config,
        phase=Phase.PRE_MOVE,
    )
    logger.debug("Created session for %s", ", ".join(cleaned))
    return state.with_log(
        EventType.GAME_START,
        "Game session created.",
        players=tuple(cleaned),
        starting_rubbies=config.starting_rubbies,
    )
