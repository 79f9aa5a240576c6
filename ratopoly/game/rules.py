"""
High-level rules API for controlling game flow.
This module provides the public interface for game actions and legal move detection.
"""

from enum import Enum
from typing import Any, Callable, Dict, List

from ratopoly.exceptions import InvalidActionError
from ratopoly.game import engine
from ratopoly.game.state import GameState, Phase


class ActionType(Enum):
    """Types of actions a participant (or agent) can take."""

    BEGIN = "begin"
    FINISH_PRE_MOVE = "finish-pre-move"
    HELL_ESCAPE = "hell-escape"
    ROLL = "roll"
    MOVE = "move"
    RESOLVE = "resolve"
    GO_PAYOUT = "go-payout"
    GO_WAGER = "go-wager"
    GO_ROLL = "go-roll"
    AFTER_EFFECTS = "after-effects"


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.action_type == other.action_type and self.params == other.params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"


# Parameters each action takes from the outside world (die rolls, coin flips,
# called faces). Everything else is decided by the snapshot.
ACTION_INPUTS: Dict[ActionType, tuple] = {
    ActionType.BEGIN: (),
    ActionType.FINISH_PRE_MOVE: (),
    ActionType.HELL_ESCAPE: ("roll", "firing_squad_survives"),
    ActionType.ROLL: ("roll",),
    ActionType.MOVE: (),
    ActionType.RESOLVE: (),
    ActionType.GO_PAYOUT: (),
    ActionType.GO_WAGER: ("face",),
    ActionType.GO_ROLL: ("roll",),
    ActionType.AFTER_EFFECTS: (),
}

_OPERATIONS: Dict[ActionType, Callable[..., GameState]] = {
    ActionType.BEGIN: engine.begin_pre_move,
    ActionType.FINISH_PRE_MOVE: engine.finish_pre_move,
    ActionType.HELL_ESCAPE: engine.resolve_hell_escape,
    ActionType.ROLL: engine.record_roll,
    ActionType.MOVE: engine.apply_movement,
    ActionType.RESOLVE: engine.resolve_current_space,
    ActionType.GO_PAYOUT: engine.take_go_payout,
    ActionType.GO_WAGER: engine.place_go_wager,
    ActionType.GO_ROLL: engine.resolve_go_lotto_roll,
    ActionType.AFTER_EFFECTS: engine.apply_after_effects,
}

_PHASE_ACTIONS: Dict[Phase, List[ActionType]] = {
    Phase.PRE_MOVE: [ActionType.FINISH_PRE_MOVE, ActionType.BEGIN],
    Phase.HELL_ESCAPE: [ActionType.HELL_ESCAPE],
    Phase.ROLL: [ActionType.ROLL],
    Phase.MOVE: [ActionType.MOVE],
    Phase.RESOLVE: [ActionType.RESOLVE],
    Phase.GO_LOTTO: [ActionType.GO_PAYOUT, ActionType.GO_WAGER],
    Phase.GO_LOTTO_ROLL: [ActionType.GO_ROLL],
    Phase.AFTER_EFFECTS: [ActionType.AFTER_EFFECTS],
    Phase.GAME_OVER: [],
}


def get_legal_actions(game_state: GameState) -> List[Action]:
    """
    Get the actions the active participant may take.

    This is the main interface for UIs and agents to determine valid moves.
    The returned actions carry no external inputs; callers fill in
    ``roll``/``face``/``firing_squad_survives`` as listed in ``ACTION_INPUTS``.

    Args:
        game_state: Current game state

    Returns:
        List of legal Action objects (empty once the game is over)
    """
    if game_state.is_over:
        return []
    return [Action(action_type) for action_type in _PHASE_ACTIONS[game_state.phase]]


def is_legal(game_state: GameState, action_type: ActionType) -> bool:
    return any(a.action_type == action_type for a in get_legal_actions(game_state))


def apply_action(game_state: GameState, action: Action) -> GameState:
    """
    Apply an action to the game state.

    This is the main interface for executing moves. An action that is not
    legal in the current phase returns the snapshot unchanged.

    Args:
        game_state: Current game state
        action: Action to apply

    Returns:
        The new snapshot

    Raises:
        InvalidActionError: ``action.action_type`` is not an engine action.
    """
    operation = _OPERATIONS.get(action.action_type)
    if operation is None:
        raise InvalidActionError(f"Unknown action: {action.action_type!r}")

    inputs = ACTION_INPUTS[action.action_type]
    kwargs = {name: action.params[name] for name in inputs if name in action.params}
    return operation(game_state, **kwargs)
