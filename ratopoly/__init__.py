"""Rat-Monopoly: a turn-based multi-board board game engine."""

from ratopoly.exceptions import BoardNotFoundError, InvalidActionError, RatopolyError, ValidationError
from ratopoly.game import GameConfig, GameState, Phase, create_game
from ratopoly.services import GameSession, replay
from ratopoly.snapshot import serialize_snapshot

__version__ = "0.1.0"

__all__ = [
    "BoardNotFoundError",
    "GameConfig",
    "GameSession",
    "GameState",
    "InvalidActionError",
    "Phase",
    "RatopolyError",
    "ValidationError",
    "create_game",
    "replay",
    "serialize_snapshot",
]
