"""
Narrative event log entries.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    LAND = "land"

    PURCHASE = "purchase"
    PURCHASE_BLOCKED = "purchase_blocked"
    RENT_PAYMENT = "rent_payment"
    RENT_SKIPPED = "rent_skipped"
    TAX_PAYMENT = "tax_payment"
    WAGE = "wage"
    JACKPOT_CHANGE = "jackpot_change"

    CARD_DRAW = "card_draw"
    CARD_EFFECT = "card_effect"
    DECK_EMPTY = "deck_empty"

    INDULGENCE_BOUGHT = "indulgence_bought"
    INDULGENCE_SPENT = "indulgence_spent"
    JOB_PROTECTION = "job_protection"
    JOB_PROTECTION_EXPIRED = "job_protection_expired"

    TELEPORT = "teleport"
    GO_TO_HELL = "go_to_hell"
    HELL_ATTEMPT = "hell_attempt"
    HELL_RELEASE = "hell_release"
    FIRING_SQUAD = "firing_squad"
    DEATH = "death"

    LOTTO_OPEN = "lotto_open"
    LOTTO_PAYOUT = "lotto_payout"
    LOTTO_WAGER = "lotto_wager"
    LOTTO_ROLL = "lotto_roll"

    BANKRUPTCY = "bankruptcy"
    AGENT_NOTE = "agent_note"
    GAME_END = "game_end"


@dataclass(frozen=True)
class GameEvent:
    """A logged event in the game. ``str(event)`` is its narrative line."""

    event_type: EventType
    message: str
    player_id: Optional[str] = None
    details: Tuple[Tuple[str, Any], ...] = field(default_factory=tuple)
    turn_number: int = 0

    @classmethod
    def create(
        cls,
        event_type: EventType,
        message: str,
        player_id: Optional[str] = None,
        turn_number: int = 0,
        **details: Any,
    ) -> "GameEvent":
        return cls(event_type, message, player_id, tuple(sorted(details.items())), turn_number)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a JSON-friendly dict."""
        payload: Dict[str, Any] = {"event_type": self.event_type.value, "message": self.message}
        if self.player_id is not None:
            payload["player_id"] = self.player_id
        payload.update(dict(self.details))
        return payload

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        player_str = self.player_id if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.message}"
