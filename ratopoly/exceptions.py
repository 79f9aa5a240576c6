"""
Custom exception hierarchy for the Ratopoly engine and services.

Ordinary game conditions (wrong phase, insufficient rubbies, failed escapes,
missed wagers, an empty deck) are never raised: they are modeled as state
transitions with log entries. Only programmer and data-integrity errors
surface as exceptions.
"""


class RatopolyError(Exception):
    """Base exception for all game-related errors."""


class BoardNotFoundError(RatopolyError):
    """A board id is absent from the session's static catalog."""

    def __init__(self, board_id: str):
        super().__init__(f"Board {board_id!r} not found")
        self.board_id = board_id


class InvalidActionError(RatopolyError):
    """Action is not part of the engine's vocabulary."""


class ValidationError(RatopolyError):
    """Input validation failed."""
