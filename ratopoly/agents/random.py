"""Random agent that makes random legal moves."""

import random
from typing import Optional

from ratopoly.agents.base import Agent
from ratopoly.agents.policy import Decision
from ratopoly.game.rules import ACTION_INPUTS, ActionType, get_legal_actions
from ratopoly.game.state import GameState


class RandomAgent(Agent):
    """
    Simple AI that makes random legal moves.

    Prefers FINISH_PRE_MOVE over BEGIN so turns keep moving.
    """

    def __init__(self, player_id: str, name: str, seed: Optional[int] = None):
        super().__init__(player_id, name)
        self.rng = random.Random(seed)

    def decide(self, game: GameState) -> Decision:
        legal = [a.action_type for a in get_legal_actions(game)]
        if not legal:
            return Decision(ActionType.BEGIN)

        if ActionType.FINISH_PRE_MOVE in legal:
            kind = ActionType.FINISH_PRE_MOVE
        else:
            kind = self.rng.choice(legal)

        inputs = ACTION_INPUTS[kind]
        return Decision(
            kind,
            (f"Random pick: {kind.value}",),
            roll=self.rng.randint(1, 6) if "roll" in inputs else None,
            firing_squad_survives=self.rng.random() < 0.5 if "firing_squad_survives" in inputs else None,
            called_face=self.rng.randint(1, 6) if "face" in inputs else None,
        )
