"""Board geometry helpers for three-player chess.

The board is three 4x8 sections, one per colour. Rows are numbered from each
colour's home row (0) towards the centre (3); columns run A-H from that
colour's left. Row 3 of every section borders the centre: stepping forward
from column A-D enters the previous colour's section and from column E-H the
next colour's, landing on that section's row 3 at the mirrored column.
"""

from __future__ import annotations

from typing import Dict, NamedTuple, Optional, Tuple

from engine.errors import ImpossiblePositionError
from engine.pieces import Colour, Direction

SECTION_ROWS = 4
SECTION_COLS = 8
COLUMN_NAMES = "ABCDEFGH"


class Position(NamedTuple):
    """A square, addressed by section colour, row and column."""

    colour: Colour
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.colour.initial}{COLUMN_NAMES[self.column]}{self.row + 1}"


def in_bounds(row: int, column: int) -> bool:
    """Return whether row/column address a square inside one section."""
    return 0 <= row < SECTION_ROWS and 0 <= column < SECTION_COLS


def parse_position(name: str) -> Position:
    """Parse names such as ``BE2`` (blue section, column E, row 2)."""
    text = name.strip().upper()
    if len(text) != 3:
        raise ImpossiblePositionError(f"Malformed position: {name!r}")
    colours = {colour.initial: colour for colour in Colour}
    colour = colours.get(text[0])
    column = COLUMN_NAMES.find(text[1])
    if colour is None or column < 0 or not text[2].isdigit():
        raise ImpossiblePositionError(f"Malformed position: {name!r}")
    row = int(text[2]) - 1
    if not in_bounds(row, column):
        raise ImpossiblePositionError(f"Position off the board: {name!r}")
    return Position(colour, row, column)


def _compute_neighbour(position: Position, direction: Direction) -> Optional[Position]:
    colour, row, column = position
    if direction is Direction.FORWARD:
        if row < SECTION_ROWS - 1:
            return Position(colour, row + 1, column)
        across = colour.previous() if column < SECTION_COLS // 2 else colour.next()
        return Position(across, row, SECTION_COLS - 1 - column)
    if direction is Direction.BACKWARD:
        return Position(colour, row - 1, column) if row > 0 else None
    if direction is Direction.LEFT:
        return Position(colour, row, column - 1) if column > 0 else None
    return Position(colour, row, column + 1) if column < SECTION_COLS - 1 else None


ALL_POSITIONS: Tuple[Position, ...] = tuple(
    Position(colour, row, column)
    for colour in Colour
    for row in range(SECTION_ROWS)
    for column in range(SECTION_COLS)
)

_NEIGHBOURS: Dict[Tuple[Position, Direction], Optional[Position]] = {
    (position, direction): _compute_neighbour(position, direction)
    for position in ALL_POSITIONS
    for direction in Direction
}


def neighbour(position: Position, direction: Direction) -> Position:
    """Return the adjacent square in the section's own orientation."""
    adjacent = _NEIGHBOURS.get((position, direction))
    if adjacent is None:
        raise ImpossiblePositionError(f"No square {direction.value} of {position}")
    return adjacent
