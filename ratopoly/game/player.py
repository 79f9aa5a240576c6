"""
Participant state.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Tuple

from ratopoly.game.spaces import BoardPosition


@dataclass(frozen=True)
class PropertyPurchase:
    """Records what a participant paid for a property."""

    property_id: str
    purchase_price: int


@dataclass(frozen=True)
class PlayerState:
    """Represents the complete state of a participant in the game."""

    player_id: str
    name: str
    rubbies: int
    indulgences: int = 0
    alive: bool = True
    board_id: str = "surface"
    space_index: int = 0
    job_protected: bool = False
    hell_escapes: int = 0
    in_hell: bool = False
    passed_start: bool = False
    owned_properties: FrozenSet[str] = field(default_factory=frozenset)
    property_purchases: Tuple[PropertyPurchase, ...] = field(default_factory=tuple)

    @property
    def position(self) -> BoardPosition:
        return BoardPosition(self.board_id, self.space_index)

    def owns(self, property_id: str) -> bool:
        return property_id in self.owned_properties

    def purchase_price(self, property_id: str) -> Optional[int]:
        """Price paid for an owned property, or None if not owned."""
        for purchase in self.property_purchases:
            if purchase.property_id == property_id:
                return purchase.purchase_price
        return None

    def moved_to(self, position: BoardPosition) -> "PlayerState":
        return replace(self, board_id=position.board_id, space_index=position.index)

    def with_property(self, property_id: str, price: int) -> "PlayerState":
        return replace(
            self,
            owned_properties=self.owned_properties | {property_id},
            property_purchases=self.property_purchases + (PropertyPurchase(property_id, price),),
        )

    def without_properties(self) -> "PlayerState":
        return replace(self, owned_properties=frozenset(), property_purchases=())

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"rubbies={self.rubbies}, position={self.position}, alive={self.alive})"
        )
