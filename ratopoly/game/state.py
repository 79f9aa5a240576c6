"""
Immutable game snapshot.

Every engine operation consumes one ``GameState`` and returns a new one.
Records are frozen and hold tuples/frozensets, so unchanged parts (boards,
deck, untouched participants) are shared between snapshots instead of copied
and no caller can mutate a snapshot another caller still holds.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from ratopoly.game.board import get_board
from ratopoly.game.cards import Card
from ratopoly.game.config import GameConfig
from ratopoly.game.events import EventType, GameEvent
from ratopoly.game.player import PlayerState
from ratopoly.game.spaces import BoardDefinition, Space


class Phase(Enum):
    """Turn phases. Each engine operation is legal in exactly one phase."""

    PRE_MOVE = "pre-move"
    HELL_ESCAPE = "hell-escape"
    ROLL = "roll"
    MOVE = "move"
    RESOLVE = "resolve"
    GO_LOTTO = "go-lotto"
    GO_LOTTO_ROLL = "go-lotto-roll"
    AFTER_EFFECTS = "after-effects"
    GAME_OVER = "game-over"


class LottoStatus(Enum):
    CHOOSE = "choose"
    AWAITING_ROLL = "awaiting-roll"


@dataclass(frozen=True)
class LottoState:
    """GO lotto sub-state."""

    status: LottoStatus = LottoStatus.CHOOSE
    called_face: Optional[int] = None


class WinReason(Enum):
    LAST_RAT = "last-rat"
    INDULGENCES = "indulgences"
    WEALTH = "wealth"


@dataclass(frozen=True)
class WinRecord:
    winner_id: str
    reason: WinReason


class GameStatusState(Enum):
    ACTIVE = "active"
    OVER = "over"


@dataclass(frozen=True)
class GameStatus:
    state: GameStatusState = GameStatusState.ACTIVE
    win: Optional[WinRecord] = None


@dataclass(frozen=True)
class GameState:
    """
    Represents the complete state of a Ratopoly session.
    This is the single authoritative snapshot handed to and returned from
    every engine operation.
    """

    boards: Tuple[BoardDefinition, ...]
    deck: Tuple[Card, ...]
    players: Tuple[PlayerState, ...]
    config: GameConfig = field(default_factory=GameConfig)
    discard: Tuple[Card, ...] = field(default_factory=tuple)
    current_player_index: int = 0
    phase: Phase = Phase.PRE_MOVE
    last_roll: Optional[int] = None
    jackpot: int = 0
    lotto: Optional[LottoState] = None
    log: Tuple[GameEvent, ...] = field(default_factory=tuple)
    status: GameStatus = field(default_factory=GameStatus)
    pending_card: Optional[Card] = None
    turn_number: int = 0

    @property
    def is_over(self) -> bool:
        return self.status.state == GameStatusState.OVER

    @property
    def winner(self) -> Optional[WinRecord]:
        return self.status.win

    @property
    def current_player(self) -> PlayerState:
        """Get the active participant."""
        return self.players[self.current_player_index]

    @property
    def current_space(self) -> Space:
        """The space the active participant is standing on."""
        player = self.current_player
        return get_board(self.boards, player.board_id).get_space(player.space_index)

    def get_board(self, board_id: str) -> BoardDefinition:
        return get_board(self.boards, board_id)

    def get_player(self, player_id: str) -> PlayerState:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise KeyError(player_id)

    def get_living_players(self) -> Tuple[PlayerState, ...]:
        """Get all participants still in the game."""
        return tuple(p for p in self.players if p.alive)

    def owner_of(self, property_id: str) -> Optional[PlayerState]:
        """Participant owning a property, or None if it belongs to the bank."""
        for player in self.players:
            if player.owns(property_id):
                return player
        return None

    def replace_player(self, player: PlayerState) -> "GameState":
        """Return a snapshot with the participant of the same id swapped in."""
        players = tuple(player if p.player_id == player.player_id else p for p in self.players)
        return replace(self, players=players)

    def update_player(self, player_id: str, updater: Callable[[PlayerState], PlayerState]) -> "GameState":
        return self.replace_player(updater(self.get_player(player_id)))

    def update_current(self, **changes: Any) -> "GameState":
        """Apply field changes to the active participant."""
        return self.replace_player(replace(self.current_player, **changes))

    def with_log(
        self,
        event_type: EventType,
        message: str,
        player_id: Optional[str] = None,
        **details: Any,
    ) -> "GameState":
        """Append a narrative event."""
        event = GameEvent.create(
            event_type, message, player_id, turn_number=self.turn_number, **details
        )
        return replace(self, log=self.log + (event,))

    def log_messages(self) -> Tuple[str, ...]:
        return tuple(str(event) for event in self.log)
