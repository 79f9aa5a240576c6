"""Base class for all Ratopoly agents."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ratopoly.agents.policy import Decision
    from ratopoly.game.state import GameState


class Agent(ABC):
    """
    Abstract base class for Ratopoly agents.

    All agents must implement the `decide` method to produce a decision for
    the active participant's current phase.

    Attributes:
        player_id: The participant's stable id ("player-1", ...).
        name: The participant's display name.
    """

    def __init__(self, player_id: str, name: str):
        """
        Initialize the agent.

        Args:
            player_id: The participant's stable id.
            name: The participant's display name.
        """
        self.player_id = player_id
        self.name = name

    @abstractmethod
    def decide(self, game: "GameState") -> "Decision":
        """
        Choose what to do in the current phase.

        Args:
            game: The current game state. Must not be modified.

        Returns:
            The decision to apply with ``apply_decision``.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.player_id}, name='{self.name}')"
