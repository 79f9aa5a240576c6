"""
Effect resolution: what happens when a participant lands on a space or draws
a card, plus the money movements (jackpot, bankruptcy) those effects trigger.

Every function here takes a snapshot and returns a new one. Phase handling
and win checks are left to ``ratopoly.game.engine``.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict

from ratopoly.game.board import HELL_ENTRY, get_space_at
from ratopoly.game.cards import Card, CardKind
from ratopoly.game.events import EventType
from ratopoly.game.spaces import BoardPosition, Space, SpaceType
from ratopoly.game.state import GameState, LottoState, LottoStatus

logger = logging.getLogger(__name__)


# === MONEY ===


def collect_jackpot(state: GameState, amount: int) -> GameState:
    """Add to (or, with a negative amount, take from) the jackpot. Never below zero."""
    if amount == 0:
        return state
    jackpot = max(0, state.jackpot + amount)
    next_state = replace(state, jackpot=jackpot)
    return next_state.with_log(
        EventType.JACKPOT_CHANGE,
        f"Jackpot changed by {amount} to {jackpot}.",
        amount=amount,
        jackpot=jackpot,
    )


def credit(state: GameState, player_id: str, amount: int) -> GameState:
    return state.update_player(player_id, lambda p: replace(p, rubbies=p.rubbies + amount))


def declare_bankruptcy(state: GameState, player_id: str, reason: str) -> GameState:
    """
    Reset a participant's rubbies and indulgences to zero.

    The forfeited balance goes to the jackpot and every owned property
    returns to the bank. The participant stays in the game.
    """
    player = state.get_player(player_id)
    forfeited = player.rubbies
    released = sorted(player.owned_properties)

    next_state = state.replace_player(
        replace(player, rubbies=0, indulgences=0).without_properties()
    )
    next_state = next_state.with_log(
        EventType.BANKRUPTCY,
        f"{player.name} went bankrupt ({reason}), forfeiting {forfeited} rubbies"
        f" and {player.indulgences} indulgences.",
        player_id,
        forfeited=forfeited,
        indulgences=player.indulgences,
        released=tuple(released),
    )
    logger.info("%s bankrupt: %s", player.name, reason)
    return collect_jackpot(next_state, forfeited)


def charge(state: GameState, player_id: str, amount: int, reason: str) -> GameState:
    """
    Apply a penalty of ``amount`` rubbies.

    The balance is floored at zero, the full amount is routed into the
    jackpot, and a balance that could not cover it ends in bankruptcy.
    """
    player = state.get_player(player_id)
    shortfall = amount > player.rubbies
    next_state = state.replace_player(replace(player, rubbies=max(0, player.rubbies - amount)))
    next_state = next_state.with_log(
        EventType.TAX_PAYMENT,
        f"{player.name} paid {min(amount, player.rubbies)} rubbies ({reason}).",
        player_id,
        amount=amount,
        reason=reason,
    )
    next_state = collect_jackpot(next_state, amount)
    if shortfall:
        next_state = declare_bankruptcy(next_state, player_id, f"could not pay {reason}")
    return next_state


def apply_rubby_delta(state: GameState, player_id: str, delta: int, reason: str) -> GameState:
    """Apply a fixed currency change: gains are credited, losses are charged."""
    if delta >= 0:
        player = state.get_player(player_id)
        next_state = credit(state, player_id, delta)
        return next_state.with_log(
            EventType.WAGE,
            f"{player.name} gained {delta} rubbies ({reason}).",
            player_id,
            amount=delta,
        )
    return charge(state, player_id, abs(delta), reason)


# === MOVEMENT ===


def relocate(state: GameState, player_id: str, position: BoardPosition) -> GameState:
    """Place a participant directly on a space without resolving it."""
    state.get_board(position.board_id)
    return state.update_player(player_id, lambda p: p.moved_to(position))


def spend_indulgence(state: GameState, player_id: str, purpose: str) -> GameState:
    player = state.get_player(player_id)
    next_state = state.replace_player(replace(player, indulgences=player.indulgences - 1))
    return next_state.with_log(
        EventType.INDULGENCE_SPENT,
        f"{player.name} spent an indulgence to {purpose}.",
        player_id,
        remaining=player.indulgences - 1,
    )


def send_to_hell(state: GameState, player_id: str, cause: str) -> GameState:
    """Drag a participant to hell unless they burn an indulgence instead."""
    player = state.get_player(player_id)
    if player.indulgences > 0:
        return spend_indulgence(state, player_id, f"avoid hell ({cause})")

    next_state = state.replace_player(
        replace(
            player.moved_to(HELL_ENTRY),
            in_hell=True,
            hell_escapes=0,
            job_protected=False,
            passed_start=False,
        )
    )
    return next_state.with_log(
        EventType.GO_TO_HELL,
        f"{player.name} was dragged to hell ({cause}).",
        player_id,
    )


def open_lotto(state: GameState) -> GameState:
    player = state.current_player
    next_state = replace(state, lotto=LottoState(LottoStatus.CHOOSE))
    return next_state.with_log(
        EventType.LOTTO_OPEN,
        f"{player.name} reached GO: take the payout or wager it on the lotto.",
        player.player_id,
        jackpot=state.jackpot,
    )


# === SPACES ===


def _resolve_go(state: GameState, space: Space) -> GameState:
    return open_lotto(state)


def _resolve_property(state: GameState, space: Space) -> GameState:
    details = space.property
    if details is None:
        return state

    player = state.current_player
    owner = state.owner_of(space.space_id)

    if owner is None:
        if player.job_protected:
            return state.with_log(
                EventType.PURCHASE_BLOCKED,
                f"{player.name} is job-protected and cannot buy {space.name}.",
                player.player_id,
                property=space.space_id,
            )
        if player.rubbies < details.price:
            return state.with_log(
                EventType.PURCHASE_BLOCKED,
                f"{player.name} cannot afford {space.name} ({details.price} rubbies).",
                player.player_id,
                property=space.space_id,
                price=details.price,
            )
        buyer = replace(player, rubbies=player.rubbies - details.price)
        next_state = state.replace_player(buyer.with_property(space.space_id, details.price))
        return next_state.with_log(
            EventType.PURCHASE,
            f"{player.name} bought {space.name} for {details.price} rubbies.",
            player.player_id,
            property=space.space_id,
            price=details.price,
            new_balance=buyer.rubbies,
        )

    if owner.player_id == player.player_id:
        return state.with_log(
            EventType.LAND,
            f"{player.name} is visiting their own {space.name}.",
            player.player_id,
        )

    rent = details.get_rent()
    if player.job_protected:
        return state.with_log(
            EventType.RENT_SKIPPED,
            f"{player.name} is job-protected and skips {rent} rent on {space.name}.",
            player.player_id,
            owner=owner.player_id,
            rent=rent,
        )

    paid = min(rent, player.rubbies)
    next_state = credit(state, player.player_id, -paid)
    next_state = credit(next_state, owner.player_id, paid)
    next_state = next_state.with_log(
        EventType.RENT_PAYMENT,
        f"{player.name} paid {paid} of {rent} rent to {owner.name} for {space.name}.",
        player.player_id,
        owner=owner.player_id,
        rent=rent,
        amount=paid,
    )
    if paid < rent:
        next_state = declare_bankruptcy(
            next_state, player.player_id, f"could not cover rent owed to {owner.name}"
        )
    return next_state


def _resolve_fixed_delta(state: GameState, space: Space) -> GameState:
    if not space.rubby_delta:
        return state
    return apply_rubby_delta(state, state.current_player.player_id, space.rubby_delta, space.name)


def _resolve_church(state: GameState, space: Space) -> GameState:
    cost = space.indulgence_cost or 0
    player = state.current_player
    if player.rubbies < cost:
        return declare_bankruptcy(state, player.player_id, f"could not afford {space.name}")

    next_state = state.replace_player(
        replace(player, rubbies=player.rubbies - cost, indulgences=player.indulgences + 1)
    )
    return next_state.with_log(
        EventType.INDULGENCE_BOUGHT,
        f"{player.name} paid {cost} rubbies at {space.name} for an indulgence.",
        player.player_id,
        cost=cost,
        indulgences=player.indulgences + 1,
    )


def _resolve_draw(state: GameState, space: Space) -> GameState:
    return draw_card(state)


def _resolve_job(state: GameState, space: Space) -> GameState:
    player = state.current_player
    next_state = state.update_current(job_protected=True, passed_start=False)
    next_state = next_state.with_log(
        EventType.JOB_PROTECTION,
        f"{player.name} took a job and is protected from rent until passing GO.",
        player.player_id,
    )
    return _resolve_fixed_delta(next_state, space)


def _resolve_hell_gate(state: GameState, space: Space) -> GameState:
    return send_to_hell(state, state.current_player.player_id, space.name)


def _resolve_teleport(state: GameState, space: Space) -> GameState:
    if space.send_to is None:
        return state
    player = state.current_player
    destination = get_space_at(state.boards, space.send_to)
    next_state = relocate(state, player.player_id, space.send_to)
    next_state = next_state.with_log(
        EventType.TELEPORT,
        f"{player.name} warped to {destination.name} on {space.send_to.board_id}.",
        player.player_id,
        destination=str(space.send_to),
    )
    if destination.space_type == SpaceType.GO:
        return open_lotto(next_state)
    return next_state


def _resolve_blank(state: GameState, space: Space) -> GameState:
    return _resolve_fixed_delta(state, space)


SPACE_HANDLERS: Dict[SpaceType, Callable[[GameState, Space], GameState]] = {
    SpaceType.GO: _resolve_go,
    SpaceType.PROPERTY: _resolve_property,
    SpaceType.TAX: _resolve_fixed_delta,
    SpaceType.CHURCH: _resolve_church,
    SpaceType.DRAW: _resolve_draw,
    SpaceType.JOB: _resolve_job,
    SpaceType.HELL_GATE: _resolve_hell_gate,
    SpaceType.TELEPORT: _resolve_teleport,
    SpaceType.BLANK: _resolve_blank,
}


def resolve_space(state: GameState, space: Space) -> GameState:
    """Apply a landed space's effect for the active participant."""
    return SPACE_HANDLERS[space.space_type](state, space)


# === CARDS ===


def draw_card(state: GameState) -> GameState:
    """Pop the head of the deck and apply it. An empty deck is a logged no-op."""
    player = state.current_player
    if not state.deck:
        return state.with_log(EventType.DECK_EMPTY, "Deck is empty; no card drawn.", player.player_id)

    card, rest = state.deck[0], state.deck[1:]
    next_state = replace(state, deck=rest, pending_card=card)
    next_state = next_state.with_log(
        EventType.CARD_DRAW,
        f"{player.name} drew: {card.description}",
        player.player_id,
        card=card.card_id,
    )
    return apply_card(next_state, card)


def apply_card(state: GameState, card: Card) -> GameState:
    """
    Execute the effects of a drawn card and move it to the discard pile.

    A card's rubby delta settles through the same path as a space delta, so
    a penalty card feeds the jackpot exactly like a tax space.
    """
    player_id = state.current_player.player_id
    next_state = state

    if card.rubby_delta:
        next_state = apply_rubby_delta(next_state, player_id, card.rubby_delta, card.description)

    if card.kind == CardKind.INDULGENCE:
        next_state = next_state.update_player(
            player_id, lambda p: replace(p, indulgences=p.indulgences + 1)
        )

    if card.move_to is not None:
        next_state = relocate(next_state, player_id, card.move_to)

    if card.send_to_hell:
        next_state = send_to_hell(next_state, player_id, card.description)

    next_state = replace(next_state, discard=next_state.discard + (card,))
    return next_state.with_log(
        EventType.CARD_EFFECT,
        f"Card resolved: {card.description}",
        player_id,
        card=card.card_id,
        kind=card.kind.value,
    )
