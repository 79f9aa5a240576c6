"""
Automated-agent decision policy.

``decide_action`` looks at a snapshot and returns a ``Decision`` without
touching the state; ``apply_decision`` logs the decision's rationale and
feeds it through ``rules.apply_action``, the same entry point a human-driven
caller uses.

Die values and coin flips come from the RNG the caller passes in. The
heuristic also works out which die face it would *like* and whether it
would call survival at the firing squad; those are advisory notes unless
``steer=True``, in which case they are submitted as the actual inputs.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ratopoly.game.board import get_board
from ratopoly.game.events import EventType
from ratopoly.game.player import PlayerState
from ratopoly.game.rules import Action, ActionType, apply_action
from ratopoly.game.spaces import Space, SpaceType
from ratopoly.game.state import GameState, Phase

logger = logging.getLogger(__name__)

HELL_GATE_DANGER = 600
TAX_DANGER = 120
DANGER_WEIGHT = 0.05
BASELINE_DESIRABILITY = 10.0

AGGRESSIVE_JACKPOT = 400
WAGER_JACKPOT = 200
RICH_DRAW_JACKPOT = 300

INDULGENCE_RESERVE = 100
MAX_HOARDED_INDULGENCES = 2


@dataclass(frozen=True)
class Decision:
    """An agent's chosen action plus its inputs and rationale."""

    kind: ActionType
    notes: Tuple[str, ...] = field(default_factory=tuple)
    roll: Optional[int] = None
    firing_squad_survives: Optional[bool] = None
    called_face: Optional[int] = None
    preferred_roll: Optional[int] = None
    lotto_call: Optional[str] = None
    buy_indulgence: bool = False
    debt_repayment: int = 0
    auction_bid: int = 0

    def to_action(self) -> Action:
        """Translate into the engine's action vocabulary."""
        params = {}
        if self.roll is not None:
            params["roll"] = self.roll
        if self.firing_squad_survives is not None:
            params["firing_squad_survives"] = self.firing_squad_survives
        if self.called_face is not None:
            params["face"] = self.called_face
        return Action(self.kind, **params)


# === HEURISTICS ===


def evaluate_space_danger(space: Space) -> float:
    """Score how much a landing on ``space`` is likely to hurt."""
    danger = 0.0
    if space.space_type == SpaceType.HELL_GATE:
        danger += HELL_GATE_DANGER
    if space.rubby_delta and space.rubby_delta < 0:
        danger += abs(space.rubby_delta)
    if space.space_type == SpaceType.PROPERTY and space.property is not None:
        danger += space.property.get_rent()
    if space.space_type == SpaceType.TAX:
        danger += TAX_DANGER
    if space.indulgence_cost:
        danger += space.indulgence_cost / 2
    return danger


def predict_landing_space(state: GameState, player: PlayerState, roll: int) -> Space:
    board = get_board(state.boards, player.board_id)
    return board.get_space(player.space_index + roll)


def score_roll(state: GameState, space: Space) -> float:
    desirability = BASELINE_DESIRABILITY - evaluate_space_danger(space) * DANGER_WEIGHT
    if space.space_type == SpaceType.DRAW:
        desirability += 4 if state.jackpot > RICH_DRAW_JACKPOT else 2
    if space.space_type == SpaceType.GO:
        desirability += 3
    if space.space_type == SpaceType.JOB:
        desirability += 1.5
    return desirability


def choose_risk_aware_roll(state: GameState, player: PlayerState) -> Tuple[int, str]:
    """
    Pick the die face with the best landing.

    Returns:
        (face, note) where ties go to the lowest face.
    """
    best_roll, best_space, best_score = 1, None, float("-inf")
    for roll in range(1, 7):
        space = predict_landing_space(state, player, roll)
        score = score_roll(state, space)
        if score > best_score:
            best_roll, best_space, best_score = roll, space, score
    return (
        best_roll,
        f"Chose roll {best_roll} targeting {best_space.name} with desirability {best_score:.1f}",
    )


def should_buy_indulgence(player: PlayerState, space: Space) -> bool:
    if not space.indulgence_cost:
        return False
    if player.indulgences >= MAX_HOARDED_INDULGENCES:
        return False
    return player.rubbies - space.indulgence_cost >= INDULGENCE_RESERVE


def plan_debt_repayment(player: PlayerState) -> int:
    if player.rubbies < 150:
        return 0
    return int(player.rubbies * 0.2)


def plan_auction_bid(player: PlayerState) -> int:
    if player.rubbies <= 300:
        return 0
    return min(200, int(player.rubbies * 0.25))


def plan_lotto_risk(state: GameState) -> str:
    if state.jackpot >= AGGRESSIVE_JACKPOT:
        return "aggressive"
    return "conservative"


def describe_role(state: GameState) -> str:
    """Short label for the active CPU's current mood."""
    player = state.current_player
    if player.in_hell:
        return "Survival mode"
    if player.rubbies < 150:
        return "Frugal rat"
    if player.indulgences > 0:
        return "Indulgent raider"
    return "Balanced opportunist"


# === DECIDE / APPLY ===


def decide_action(state: GameState, rng: random.Random, *, steer: bool = False) -> Decision:
    """
    Choose what the active participant does in the current phase.

    Args:
        state: Current snapshot (never modified).
        rng: Source for die values, coin flips and called faces.
        steer: Submit the heuristic's preferred die face and firing-squad
            call as the real inputs instead of the RNG's.

    Returns:
        A Decision for ``apply_decision``.
    """
    player = state.current_player
    phase = state.phase

    if phase == Phase.PRE_MOVE:
        return Decision(ActionType.FINISH_PRE_MOVE, ("Clearing pre-move checks",))

    if phase == Phase.HELL_ESCAPE:
        survive_call = player.hell_escapes >= 2
        coin = survive_call if steer else rng.random() < 0.5
        notes = ["In hell - prioritizing survival"]
        if player.indulgences > 0:
            notes.append("Burning an indulgence to leave")
        notes.append(f"Firing squad call: {'survive' if survive_call else 'fall'}")
        return Decision(
            ActionType.HELL_ESCAPE,
            tuple(notes),
            roll=rng.randint(1, 6),
            firing_squad_survives=coin,
        )

    if phase == Phase.ROLL:
        preferred, note = choose_risk_aware_roll(state, player)
        roll = preferred if steer else rng.randint(1, 6)
        return Decision(
            ActionType.ROLL,
            ("Rent avoidance and lotto risk tuning", note),
            roll=roll,
            preferred_roll=preferred,
            lotto_call=plan_lotto_risk(state),
        )

    if phase == Phase.MOVE:
        return Decision(ActionType.MOVE, ("Advance to landing space",))

    if phase == Phase.RESOLVE:
        space = state.current_space
        buy_indulgence = should_buy_indulgence(player, space)
        notes = ["Resolve current space effects"]
        if buy_indulgence:
            notes.append("Buying indulgence to hedge against penalties")
        debt = plan_debt_repayment(player)
        if debt > 0:
            notes.append(f"Repaying {debt} rubbies if debt exists")
        return Decision(
            ActionType.RESOLVE,
            tuple(notes),
            buy_indulgence=buy_indulgence,
            debt_repayment=debt,
            auction_bid=plan_auction_bid(player),
        )

    if phase == Phase.GO_LOTTO:
        risk = plan_lotto_risk(state)
        if risk == "aggressive" or state.jackpot >= WAGER_JACKPOT:
            face = rng.randint(1, 6)
            return Decision(
                ActionType.GO_WAGER,
                ("Gambling GO payout on lotto", f"Calling {face}"),
                called_face=face,
                lotto_call=risk,
            )
        return Decision(
            ActionType.GO_PAYOUT,
            (f"Taking safe {state.config.go_payout} rubbies from GO",),
            lotto_call=risk,
        )

    if phase == Phase.GO_LOTTO_ROLL:
        return Decision(ActionType.GO_ROLL, ("Rolling for GO lotto jackpot",), roll=rng.randint(1, 6))

    if phase == Phase.AFTER_EFFECTS:
        return Decision(ActionType.AFTER_EFFECTS, ("Wrapping up turn",))

    return Decision(ActionType.BEGIN)


def apply_decision(state: GameState, decision: Decision) -> GameState:
    """
    Log a decision's notes and run it through the engine.

    A decision the engine ignores (wrong phase, game over) leaves the
    snapshot untouched, notes included.
    """
    if state.is_over:
        return state

    player = state.current_player
    base = state
    if decision.notes:
        base = state.with_log(
            EventType.AGENT_NOTE,
            f"{player.name} (CPU): {' | '.join(decision.notes)}",
            player.player_id,
            action=decision.kind.value,
        )

    result = apply_action(base, decision.to_action())
    if result is base:
        logger.debug("Decision %s ignored during %s", decision.kind.value, state.phase.value)
        return state
    return result
