"""
Turn state machine.

Each public operation is legal in exactly one ``Phase``. Calling it in any
other phase, or once the game is over, returns the input snapshot unchanged
so automated callers can poll safely. All randomness (die values, coin
flips) is supplied by the caller; the engine never rolls its own dice.
"""

import functools
import logging
from dataclasses import replace
from typing import Callable, Optional, TypeVar

from ratopoly.exceptions import ValidationError
from ratopoly.game.board import SURFACE_BOARD_ID, SURFACE_START
from ratopoly.game.effects import collect_jackpot, credit, resolve_space, spend_indulgence
from ratopoly.game.events import EventType
from ratopoly.game.spaces import SpaceType
from ratopoly.game.state import (
    GameState,
    GameStatus,
    GameStatusState,
    LottoState,
    LottoStatus,
    Phase,
    WinReason,
    WinRecord,
)

logger = logging.getLogger(__name__)

Operation = TypeVar("Operation", bound=Callable[..., GameState])


def requires_phase(phase: Phase) -> Callable[[Operation], Operation]:
    """Make an operation a no-op outside ``phase`` or after the game ended."""

    def decorator(func: Operation) -> Operation:
        @functools.wraps(func)
        def wrapper(state: GameState, *args, **kwargs) -> GameState:
            if state.is_over or state.phase != phase:
                logger.debug("Ignoring %s during %s", func.__name__, state.phase.value)
                return state
            return func(state, *args, **kwargs)

        wrapper.phase = phase  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator


def _validate_die(value: Optional[int], what: str = "Die roll") -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= 6:
        raise ValidationError(f"{what} must be an integer from 1 to 6, got {value!r}")
    return value


# === WIN CONDITIONS ===


def _mark_game_over(state: GameState, win: WinRecord) -> GameState:
    next_state = replace(
        state,
        phase=Phase.GAME_OVER,
        status=GameStatus(GameStatusState.OVER, win),
        lotto=None,
    )
    logger.info("Game over: %s wins by %s", win.winner_id, win.reason.value)
    return next_state.with_log(
        EventType.GAME_END,
        f"Game over: {win.winner_id} wins by {win.reason.value}.",
        win.winner_id,
        reason=win.reason.value,
    )


def check_win_conditions(state: GameState) -> GameState:
    """
    End the game if a win condition holds.

    Rules are evaluated in a fixed order and each rule scans every
    participant before the next rule is tried:

    1. exactly one living participant -> ``last-rat``
    2. a living participant with enough indulgences -> ``indulgences``
    3. a living participant with enough rubbies -> ``wealth``
    """
    if state.is_over:
        return state

    config = state.config
    living = state.get_living_players()
    if len(living) == 1:
        return _mark_game_over(state, WinRecord(living[0].player_id, WinReason.LAST_RAT))

    for player in living:
        if player.indulgences >= config.indulgence_win:
            return _mark_game_over(state, WinRecord(player.player_id, WinReason.INDULGENCES))

    for player in living:
        if player.rubbies >= config.wealth_win:
            return _mark_game_over(state, WinRecord(player.player_id, WinReason.WEALTH))

    return state


def _settle(state: GameState, next_phase: Phase) -> GameState:
    """Re-check wins, then move to ``next_phase`` if the game goes on."""
    checked = check_win_conditions(state)
    if checked.is_over:
        return checked
    return replace(checked, phase=next_phase)


def _advance_to_next_player(state: GameState) -> GameState:
    """Hand the turn to the next living participant, skipping the dead."""
    count = len(state.players)
    if not state.get_living_players():
        return state

    next_index = state.current_player_index
    for _ in range(count):
        next_index = (next_index + 1) % count
        if state.players[next_index].alive:
            break

    next_state = replace(
        state,
        current_player_index=next_index,
        phase=Phase.PRE_MOVE,
        last_roll=None,
        pending_card=None,
        lotto=None,
        turn_number=state.turn_number + 1,
    )
    player = next_state.current_player
    return next_state.with_log(
        EventType.TURN_START,
        f"Turn passes to {player.name}.",
        player.player_id,
        turn=next_state.turn_number,
    )


# === PRE-MOVE ===


@requires_phase(Phase.PRE_MOVE)
def begin_pre_move(state: GameState) -> GameState:
    """Reset per-turn scratch values at the start of a turn."""
    return replace(state, last_roll=None, pending_card=None, lotto=None)


@requires_phase(Phase.PRE_MOVE)
def finish_pre_move(state: GameState) -> GameState:
    """Route to ``hell-escape`` for a participant in hell, ``roll`` otherwise."""
    if state.current_player.in_hell:
        return replace(state, phase=Phase.HELL_ESCAPE)
    return replace(state, phase=Phase.ROLL)


# === HELL ===


def _release_from_hell(state: GameState, player_id: str) -> GameState:
    return state.update_player(
        player_id,
        lambda p: replace(p.moved_to(SURFACE_START), in_hell=False, hell_escapes=0),
    )


def _execute(state: GameState, player_id: str) -> GameState:
    """Firing squad: everything the participant holds is forfeited and they die."""
    player = state.get_player(player_id)
    forfeited = player.rubbies + state.config.firing_squad_penalty
    next_state = state.replace_player(
        replace(
            player,
            alive=False,
            rubbies=0,
            indulgences=0,
            in_hell=False,
            hell_escapes=0,
            job_protected=False,
        ).without_properties()
    )
    next_state = collect_jackpot(next_state, forfeited)
    return next_state.with_log(
        EventType.DEATH,
        f"{player.name} was executed in hell.",
        player_id,
        forfeited=forfeited,
    )


@requires_phase(Phase.HELL_ESCAPE)
def resolve_hell_escape(
    state: GameState,
    roll: Optional[int] = None,
    firing_squad_survives: Optional[bool] = None,
) -> GameState:
    """
    Resolve one attempt to leave hell.

    A held indulgence is spent automatically and ends the stay without a
    roll. Otherwise the attempt needs ``config.required_escape_roll(attempt)``
    (6, then 5, then 4). Failing the firing-squad attempt hands the outcome to
    the coin flip; ``None`` counts as not surviving.

    Args:
        state: Current snapshot.
        roll: Die value 1-6. Not needed when an indulgence is held.
        firing_squad_survives: Coin-flip outcome for the firing squad.

    Returns:
        New snapshot in ``roll`` (escaped), ``after-effects`` (failed or
        survived the squad), ``pre-move`` of the next participant (executed)
        or ``game-over``.
    """
    config = state.config
    player = state.current_player
    pid = player.player_id

    if player.indulgences > 0:
        next_state = spend_indulgence(state, pid, "cut short their stay in hell")
        next_state = _release_from_hell(next_state, pid)
        next_state = next_state.with_log(
            EventType.HELL_RELEASE,
            f"{player.name} left hell on an indulgence.",
            pid,
            method="indulgence",
        )
        return replace(next_state, phase=Phase.ROLL)

    roll = _validate_die(roll)
    attempt = player.hell_escapes + 1
    required = config.required_escape_roll(attempt)
    next_state = state.update_current(hell_escapes=attempt)

    if roll >= required:
        next_state = _release_from_hell(next_state, pid)
        next_state = next_state.with_log(
            EventType.HELL_RELEASE,
            f"{player.name} escaped hell on attempt {attempt} with a roll of {roll}"
            f" (needed {required}+).",
            pid,
            method="roll",
            attempt=attempt,
            roll=roll,
        )
        return replace(next_state, phase=Phase.ROLL)

    if attempt < config.firing_squad_attempt:
        next_state = next_state.with_log(
            EventType.HELL_ATTEMPT,
            f"{player.name} failed hell escape attempt {attempt} with a roll of {roll}"
            f" (needed {required}+).",
            pid,
            attempt=attempt,
            roll=roll,
        )
        return replace(next_state, phase=Phase.AFTER_EFFECTS)

    next_state = next_state.with_log(
        EventType.FIRING_SQUAD,
        f"{player.name} failed escape attempt {attempt} (roll {roll}) and faces the firing squad.",
        pid,
        attempt=attempt,
        roll=roll,
        survives=bool(firing_squad_survives),
    )
    if not firing_squad_survives:
        next_state = check_win_conditions(_execute(next_state, pid))
        if next_state.is_over:
            # The active index must not rest on the executed participant.
            winner_index = next(
                i for i, p in enumerate(next_state.players)
                if p.player_id == next_state.winner.winner_id
            )
            return replace(next_state, current_player_index=winner_index)
        return _advance_to_next_player(next_state)

    next_state = _release_from_hell(next_state, pid)
    next_state = next_state.with_log(
        EventType.HELL_RELEASE,
        f"{player.name} survived the firing squad coin flip and returns to GO.",
        pid,
        method="firing_squad",
    )
    return replace(next_state, phase=Phase.AFTER_EFFECTS)


# === ROLL / MOVE / RESOLVE ===


@requires_phase(Phase.ROLL)
def record_roll(state: GameState, roll: int) -> GameState:
    """Record the supplied die value."""
    roll = _validate_die(roll)
    player = state.current_player
    next_state = replace(state, last_roll=roll, phase=Phase.MOVE)
    return next_state.with_log(
        EventType.DICE_ROLL,
        f"{player.name} rolled a {roll}.",
        player.player_id,
        roll=roll,
    )


@requires_phase(Phase.MOVE)
def apply_movement(state: GameState) -> GameState:
    """Advance the participant by the recorded roll, wrapping around the board."""
    if state.last_roll is None:
        logger.debug("No recorded roll to move by")
        return state

    player = state.current_player
    board = state.get_board(player.board_id)
    steps = player.space_index + state.last_roll
    new_index = steps % len(board)
    passed_start = player.passed_start or (
        board.board_id == SURFACE_BOARD_ID and steps >= len(board)
    )

    next_state = state.update_current(space_index=new_index, passed_start=passed_start)
    next_state = next_state.with_log(
        EventType.MOVE,
        f"{player.name} moved {state.last_roll} spaces to {board.spaces[new_index].name}.",
        player.player_id,
        board=board.board_id,
        to=new_index,
        spaces=state.last_roll,
    )
    return replace(next_state, phase=Phase.RESOLVE)


@requires_phase(Phase.RESOLVE)
def resolve_current_space(state: GameState) -> GameState:
    """Apply the landed space's effect, opening the lotto when it leads to GO."""
    player = state.current_player
    space = state.current_space
    next_state = state.with_log(
        EventType.LAND,
        f"{player.name} resolved {space.name}.",
        player.player_id,
        space=space.space_id,
    )
    next_state = resolve_space(next_state, space)
    if next_state.lotto is not None:
        return _settle(next_state, Phase.GO_LOTTO)
    return _settle(next_state, Phase.AFTER_EFFECTS)


# === GO LOTTO ===


def _go_payout(state: GameState) -> int:
    space = state.current_space
    if space.space_type == SpaceType.GO and space.rubby_delta:
        return space.rubby_delta
    return state.config.go_payout


@requires_phase(Phase.GO_LOTTO)
def take_go_payout(state: GameState) -> GameState:
    """Collect the fixed GO payout."""
    player = state.current_player
    payout = _go_payout(state)
    next_state = replace(credit(state, player.player_id, payout), lotto=None)
    next_state = next_state.with_log(
        EventType.LOTTO_PAYOUT,
        f"{player.name} took {payout} rubbies from GO.",
        player.player_id,
        amount=payout,
    )
    return _settle(next_state, Phase.AFTER_EFFECTS)


@requires_phase(Phase.GO_LOTTO)
def place_go_wager(state: GameState, face: int) -> GameState:
    """Wager the GO payout on a die face. The payout goes into the jackpot now."""
    face = _validate_die(face, "Called face")
    player = state.current_player
    payout = _go_payout(state)
    next_state = collect_jackpot(state, payout)
    next_state = replace(next_state, lotto=LottoState(LottoStatus.AWAITING_ROLL, face))
    next_state = next_state.with_log(
        EventType.LOTTO_WAGER,
        f"{player.name} wagered {payout} rubbies on a {face}.",
        player.player_id,
        face=face,
        amount=payout,
        jackpot=next_state.jackpot,
    )
    return replace(next_state, phase=Phase.GO_LOTTO_ROLL)


@requires_phase(Phase.GO_LOTTO_ROLL)
def resolve_go_lotto_roll(state: GameState, roll: int) -> GameState:
    """Roll for the jackpot: the called face wins all of it."""
    roll = _validate_die(roll)
    player = state.current_player
    called = state.lotto.called_face if state.lotto is not None else None

    if roll == called:
        winnings = state.jackpot
        next_state = credit(state, player.player_id, winnings)
        next_state = collect_jackpot(next_state, -winnings)
        next_state = next_state.with_log(
            EventType.LOTTO_ROLL,
            f"{player.name} rolled a {roll} and won the {winnings} rubby jackpot!",
            player.player_id,
            roll=roll,
            called=called,
            won=winnings,
        )
    else:
        next_state = state.with_log(
            EventType.LOTTO_ROLL,
            f"{player.name} rolled a {roll} but called {called}; the jackpot stays at {state.jackpot}.",
            player.player_id,
            roll=roll,
            called=called,
            won=0,
        )
    return _settle(replace(next_state, lotto=None), Phase.AFTER_EFFECTS)


# === AFTER-EFFECTS ===


@requires_phase(Phase.AFTER_EFFECTS)
def apply_after_effects(state: GameState) -> GameState:
    """Expire job protection at GO, re-check wins, and pass the turn."""
    player = state.current_player
    next_state = state
    on_start = player.position == SURFACE_START
    if player.job_protected and (on_start or player.passed_start):
        next_state = next_state.update_current(job_protected=False)
        next_state = next_state.with_log(
            EventType.JOB_PROTECTION_EXPIRED,
            f"{player.name}'s job protection expired after passing GO.",
            player.player_id,
        )
    if player.passed_start:
        next_state = next_state.update_current(passed_start=False)

    next_state = check_win_conditions(next_state)
    if next_state.is_over:
        return next_state
    return _advance_to_next_player(next_state)
