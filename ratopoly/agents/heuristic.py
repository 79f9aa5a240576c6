"""Risk-aware CPU rat driven by the landing-danger heuristic."""

import random
from typing import Optional

from ratopoly.agents.base import Agent
from ratopoly.agents.policy import Decision, decide_action, describe_role
from ratopoly.game.state import GameState


class HeuristicAgent(Agent):
    """
    CPU participant using ``policy.decide_action``.

    Avoids dangerous landings, hedges with indulgences, and gambles on the
    GO lotto once the jackpot is worth it.
    """

    def __init__(self, player_id: str, name: str, seed: Optional[int] = None, steer: bool = False):
        """
        Initialize the heuristic agent.

        Args:
            player_id: The participant's stable id.
            name: The participant's display name.
            seed: RNG seed for dice and called faces. Defaults to the
                player id, so agents are deterministic per seat.
            steer: Submit preferred die faces instead of rolled ones.
        """
        super().__init__(player_id, name)
        self.rng = random.Random(seed if seed is not None else player_id)
        self.steer = steer

    def decide(self, game: GameState) -> Decision:
        return decide_action(game, self.rng, steer=self.steer)

    def role(self, game: GameState) -> str:
        return describe_role(game)
