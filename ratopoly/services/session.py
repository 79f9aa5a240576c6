"""
GameSession orchestrates the core engine with agents, dice and input recording.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ratopoly.agents import Agent, Decision, HeuristicAgent, RandomAgent, apply_decision
from ratopoly.exceptions import ValidationError
from ratopoly.game.cards import DEFAULT_DECK, Card, shuffle_cards
from ratopoly.game.config import GameConfig
from ratopoly.game.rules import ACTION_INPUTS, Action, ActionType, get_legal_actions
from ratopoly.game.setup import create_game
from ratopoly.game.state import GameState
from ratopoly.snapshot import serialize_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedInput:
    """One applied transition with every external input it consumed."""

    player_id: str
    action: str
    params: Dict[str, Any] = field(default_factory=dict)
    notes: tuple = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "action": self.action,
            "params": dict(self.params),
            "notes": list(self.notes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordedInput":
        return cls(
            player_id=data["player_id"],
            action=data["action"],
            params=dict(data.get("params", {})),
            notes=tuple(data.get("notes", ())),
        )

    def to_decision(self) -> Decision:
        return Decision(
            ActionType(self.action),
            self.notes,
            roll=self.params.get("roll"),
            firing_squad_survives=self.params.get("firing_squad_survives"),
            called_face=self.params.get("face"),
        )


class GameSession:
    """
    Holds the one authoritative snapshot for a game and replaces it after
    every transition.

    Human participants act through ``perform``; CPU participants through
    ``step``. Every applied transition is appended to ``inputs`` so the game
    can be rebuilt with ``replay``.
    """

    def __init__(
        self,
        state: GameState,
        agents: Optional[Dict[str, Agent]] = None,
        seed: Optional[int] = None,
    ):
        self.state = state
        self.agents: Dict[str, Agent] = agents or {}
        self.dice = random.Random(seed)
        self.inputs: List[RecordedInput] = []

    @classmethod
    def create(
        cls,
        names: Sequence[str],
        cpu_names: Iterable[str] = (),
        *,
        seed: Optional[int] = None,
        config: Optional[GameConfig] = None,
        agent_type: str = "heuristic",
        shuffle: bool = False,
        steer: bool = False,
    ) -> "GameSession":
        """
        Start a session.

        Args:
            names: Participant names in turn order.
            cpu_names: Which of ``names`` are played by the computer.
            seed: Seed for the session dice, deck shuffle and CPU agents.
            config: Rules constants.
            agent_type: "heuristic" or "random".
            shuffle: Shuffle the deck before the first draw.
            steer: Let heuristic agents submit their preferred die faces.
        """
        rng = random.Random(seed)
        deck: Sequence[Card] = shuffle_cards(DEFAULT_DECK, rng) if shuffle else DEFAULT_DECK
        state = create_game(names, config, deck)

        cpu = {name.strip() for name in cpu_names}
        agents: Dict[str, Agent] = {}
        for player in state.players:
            if player.name not in cpu:
                continue
            agent_seed = None if seed is None else seed + len(agents) + 1
            agents[player.player_id] = cls._build_agent(
                agent_type, player.player_id, player.name, agent_seed, steer
            )
        return cls(state, agents, seed)

    @staticmethod
    def _build_agent(
        agent_type: str, player_id: str, name: str, seed: Optional[int], steer: bool = False
    ) -> Agent:
        if agent_type == "random":
            return RandomAgent(player_id, name, seed=seed)
        if agent_type == "heuristic":
            return HeuristicAgent(player_id, name, seed=seed, steer=steer)
        raise ValidationError(f"Unknown agent type: {agent_type}")

    # ---- Queries ----

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    def is_cpu_turn(self) -> bool:
        return not self.state.is_over and self.state.current_player.player_id in self.agents

    def legal_actions(self) -> List[Action]:
        return get_legal_actions(self.state)

    def snapshot(self) -> Dict[str, Any]:
        return serialize_snapshot(self.state)

    # ---- Transitions ----

    def _commit(self, decision: Decision) -> GameState:
        actor = self.state.current_player.player_id
        next_state = apply_decision(self.state, decision)
        if next_state is self.state:
            return self.state

        params = {
            name: value
            for name, value in decision.to_action().params.items()
            if name in ACTION_INPUTS[decision.kind]
        }
        self.inputs.append(RecordedInput(actor, decision.kind.value, params, decision.notes))
        self.state = next_state
        return next_state

    def perform(self, action_type: Union[ActionType, str], **params: Any) -> GameState:
        """
        Apply a human participant's action.

        Missing die rolls, called faces and coin flips are drawn from the
        session dice, the way a physical table would roll for the player.
        """
        action_type = ActionType(action_type)
        inputs = ACTION_INPUTS[action_type]
        if "roll" in inputs and params.get("roll") is None:
            params["roll"] = self.dice.randint(1, 6)
        if "face" in inputs and params.get("face") is None:
            params["face"] = self.dice.randint(1, 6)
        if "firing_squad_survives" in inputs and params.get("firing_squad_survives") is None:
            params["firing_squad_survives"] = self.dice.random() < 0.5
        return self._commit(
            Decision(
                action_type,
                roll=params.get("roll"),
                firing_squad_survives=params.get("firing_squad_survives"),
                called_face=params.get("face"),
            )
        )

    def step(self) -> GameState:
        """Let the active CPU participant take one action. No-op on a human's turn."""
        if not self.is_cpu_turn():
            return self.state
        agent = self.agents[self.state.current_player.player_id]
        decision = agent.decide(self.state)
        logger.debug("%s decided %s", agent.name, decision.kind.value)
        return self._commit(decision)

    def run(self, max_steps: int = 5000) -> GameState:
        """Step CPU participants until the game ends, a human must act, or the cap is hit."""
        for _ in range(max_steps):
            if not self.is_cpu_turn():
                break
            before = self.state
            if self.step() is before:
                logger.warning("CPU made no progress during %s", before.phase.value)
                break
        return self.state


def replay(
    names: Sequence[str],
    inputs: Iterable[Union[RecordedInput, Dict[str, Any]]],
    config: Optional[GameConfig] = None,
    deck: Optional[Sequence[Card]] = None,
) -> GameState:
    """Rebuild a game from its recorded inputs. The result equals the original final snapshot."""
    state = create_game(names, config, deck)
    for item in inputs:
        recorded = item if isinstance(item, RecordedInput) else RecordedInput.from_dict(item)
        state = apply_decision(state, recorded.to_decision())
    return state
