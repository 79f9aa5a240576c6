"""
Board space definitions and types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class SpaceType(Enum):
    """Types of spaces on a board."""

    GO = "go"
    PROPERTY = "property"
    TAX = "tax"
    CHURCH = "church"
    DRAW = "draw"
    JOB = "job"
    HELL_GATE = "hell-gate"
    TELEPORT = "teleport"
    BLANK = "blank"


class BoardKind(Enum):
    """Which layer of the city a board represents."""

    SURFACE = "surface"
    SUBSURFACE = "subsurface"
    HELL = "hell"


@dataclass(frozen=True)
class BoardPosition:
    """A space address: board id plus index on that board."""

    board_id: str
    index: int

    def __str__(self) -> str:
        return f"{self.board_id}:{self.index}"


@dataclass(frozen=True)
class PropertyDetails:
    """Purchase and rent terms for a property space."""

    price: int
    rent: int
    rent_multiplier: Optional[float] = None

    def get_rent(self) -> int:
        """Rent owed by a visitor: base rent times the optional multiplier."""
        multiplier = self.rent_multiplier if self.rent_multiplier is not None else 1
        return int(self.rent * multiplier)


@dataclass(frozen=True)
class Space:
    """A single space on a board."""

    space_id: str
    name: str
    space_type: SpaceType
    rubby_delta: Optional[int] = None
    card_draw: bool = False
    send_to: Optional[BoardPosition] = None
    indulgence_cost: Optional[int] = None
    property: Optional[PropertyDetails] = None

    def __repr__(self) -> str:
        return f"Space(id='{self.space_id}', type={self.space_type.value})"


@dataclass(frozen=True)
class BoardDefinition:
    """An ordered ring of spaces. Static for the lifetime of a session."""

    board_id: str
    name: str
    kind: BoardKind
    spaces: Tuple[Space, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.spaces)

    def get_space(self, index: int) -> Space:
        """Get the space at the given index, wrapping around the board."""
        return self.spaces[index % len(self.spaces)]

    def find_space(self, space_id: str) -> Optional[int]:
        """Index of the space with the given id, or None."""
        for index, space in enumerate(self.spaces):
            if space.space_id == space_id:
                return index
        return None
