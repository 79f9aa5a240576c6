"""
Event card definitions and the default deck.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from ratopoly.game.spaces import BoardPosition


class CardKind(Enum):
    """Types of card effects."""

    INDULGENCE = "indulgence"
    CASH = "cash"
    PENALTY = "penalty"
    MOVE = "move"
    HELL = "hell"


@dataclass(frozen=True)
class Card:
    """An event card. Effects are applied in field order when drawn."""

    card_id: str
    kind: CardKind
    description: str
    rubby_delta: Optional[int] = None
    move_to: Optional[BoardPosition] = None
    send_to_hell: bool = False

    def __repr__(self) -> str:
        return f"Card('{self.card_id}')"


DEFAULT_DECK: Tuple[Card, ...] = (
    Card("indulgence-1", CardKind.INDULGENCE, "Receive an indulgence from the church."),
    Card("cash-1", CardKind.CASH, "Found a ruby stash. Gain 200 rubbies.", rubby_delta=200),
    Card("penalty-1", CardKind.PENALTY, "Rat mob shakedown. Pay 150 rubbies.", rubby_delta=-150),
    Card(
        "move-1",
        CardKind.MOVE,
        "Shortcut to the sewer entrance.",
        # Lands on the Subsewer Gate itself; surface:6 is the Hell Gate, not an entrance.
        move_to=BoardPosition("subsurface", 0),
    ),
    Card("hell-1", CardKind.HELL, "Dragged to hell for your sins.", send_to_hell=True),
)


def shuffle_cards(cards: Sequence[Card], rng: random.Random) -> Tuple[Card, ...]:
    """
    Return a shuffled copy of a deck.

    The engine never shuffles on its own; a caller that wants a random deck
    order shuffles before the session starts and passes the RNG explicitly.
    """
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return tuple(shuffled)
