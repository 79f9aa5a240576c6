"""
Static board catalog: the surface streets, the subsurface sewer and hell.
"""

from typing import Sequence, Tuple

from ratopoly.exceptions import BoardNotFoundError
from ratopoly.game.spaces import (
    BoardDefinition,
    BoardKind,
    BoardPosition,
    PropertyDetails,
    Space,
    SpaceType,
)

SURFACE_BOARD_ID = "surface"
SUBSURFACE_BOARD_ID = "subsurface"
HELL_BOARD_ID = "hell"

SURFACE_START = BoardPosition(SURFACE_BOARD_ID, 0)
HELL_ENTRY = BoardPosition(HELL_BOARD_ID, 0)


def _surface_board() -> BoardDefinition:
    return BoardDefinition(
        SURFACE_BOARD_ID,
        "Surface Streets",
        BoardKind.SURFACE,
        (
            Space("go", "GO / Lotto", SpaceType.GO, rubby_delta=200),
            Space("church", "Church", SpaceType.CHURCH, indulgence_cost=300),
            Space("tax", "Tax Office", SpaceType.TAX, rubby_delta=-150),
            Space(
                "property-a",
                "Trash Palace",
                SpaceType.PROPERTY,
                property=PropertyDetails(price=220, rent=150),
            ),
            Space("draw-1", "Sniff a Card", SpaceType.DRAW, card_draw=True),
            Space("job", "Job Board", SpaceType.JOB, rubby_delta=100),
            Space("hell-gate", "Hell Gate", SpaceType.HELL_GATE, send_to=HELL_ENTRY),
            Space(
                "property-b",
                "Roach District",
                SpaceType.PROPERTY,
                property=PropertyDetails(price=180, rent=60, rent_multiplier=1.5),
            ),
            Space("draw-2", "Rat Lotto", SpaceType.DRAW, card_draw=True),
            Space(
                "teleport",
                "Subsewer Exit",
                SpaceType.TELEPORT,
                send_to=BoardPosition(SUBSURFACE_BOARD_ID, 0),
            ),
        ),
    )


def _subsurface_board() -> BoardDefinition:
    return BoardDefinition(
        SUBSURFACE_BOARD_ID,
        "Subsurface Sewer",
        BoardKind.SUBSURFACE,
        (
            Space("entry", "Subsewer Gate", SpaceType.BLANK),
            Space(
                "property-c",
                "Pipe Palace",
                SpaceType.PROPERTY,
                property=PropertyDetails(price=120, rent=80),
            ),
            Space("tax-2", "Flooded Toll", SpaceType.TAX, rubby_delta=-100),
            Space("draw-3", "Scrap Stash", SpaceType.DRAW, card_draw=True),
            Space("exit", "Exit to GO", SpaceType.TELEPORT, send_to=SURFACE_START),
        ),
    )


def _hell_board() -> BoardDefinition:
    return BoardDefinition(
        HELL_BOARD_ID,
        "Hell Pit",
        BoardKind.HELL,
        (
            Space("cell", "Cell Block", SpaceType.BLANK),
            Space("firing", "Firing Squad", SpaceType.BLANK),
        ),
    )


def create_standard_boards() -> Tuple[BoardDefinition, ...]:
    """Create the standard three-board catalog."""
    return (_surface_board(), _subsurface_board(), _hell_board())


def get_board(boards: Sequence[BoardDefinition], board_id: str) -> BoardDefinition:
    """
    Look up a board by id.

    Raises:
        BoardNotFoundError: the catalog is fixed at session start, so a
            missing id means corrupted data rather than a game condition.
    """
    for board in boards:
        if board.board_id == board_id:
            return board
    raise BoardNotFoundError(board_id)


def get_space_at(boards: Sequence[BoardDefinition], position: BoardPosition) -> Space:
    """Get the space at a board position."""
    return get_board(boards, position.board_id).get_space(position.index)


def find_property(boards: Sequence[BoardDefinition], space_id: str) -> Space:
    """Find a property space anywhere in the catalog by its id."""
    for board in boards:
        index = board.find_space(space_id)
        if index is not None:
            return board.spaces[index]
    raise KeyError(space_id)
