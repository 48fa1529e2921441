"""Piece definitions and movement patterns for three-player chess."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class Colour(str, Enum):
    """Player colour, listed in turn order."""

    BLUE = "blue"
    GREEN = "green"
    RED = "red"

    def next(self) -> "Colour":
        members = list(Colour)
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> "Colour":
        members = list(Colour)
        return members[(members.index(self) - 1) % len(members)]

    @property
    def initial(self) -> str:
        return self.value[0].upper()


class Direction(str, Enum):
    """Single-square step, relative to the owner's side of the board."""

    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"

    def reversed(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE: Dict[Direction, Direction] = {
    Direction.FORWARD: Direction.BACKWARD,
    Direction.BACKWARD: Direction.FORWARD,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

F, B, L, R = Direction.FORWARD, Direction.BACKWARD, Direction.LEFT, Direction.RIGHT

Step = Tuple[Direction, ...]


class PieceType(str, Enum):
    """Chess piece kinds."""

    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"

    @property
    def steps(self) -> Tuple[Step, ...]:
        return PIECE_STEPS[self]

    @property
    def step_reps(self) -> int:
        return STEP_REPS[self]


_ORTHOGONAL: Tuple[Step, ...] = ((F,), (B,), (L,), (R,))
_DIAGONAL: Tuple[Step, ...] = ((F, L), (F, R), (B, L), (B, R))

PIECE_STEPS: Dict[PieceType, Tuple[Step, ...]] = {
    PieceType.PAWN: ((F,), (F, F), (F, L), (F, R)),
    PieceType.KNIGHT: (
        (F, F, L),
        (F, F, R),
        (B, B, L),
        (B, B, R),
        (L, L, F),
        (L, L, B),
        (R, R, F),
        (R, R, B),
    ),
    PieceType.BISHOP: _DIAGONAL,
    PieceType.ROOK: _ORTHOGONAL,
    PieceType.QUEEN: _ORTHOGONAL + _DIAGONAL,
    PieceType.KING: _ORTHOGONAL + _DIAGONAL,
}

STEP_REPS: Dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 1,
    PieceType.BISHOP: 8,
    PieceType.ROOK: 8,
    PieceType.QUEEN: 8,
    PieceType.KING: 1,
}

PIECE_VALUES: Dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 10,
}

PIECE_SYMBOL: Dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

# Columns A-H of each colour's home row.
BACK_RANK: List[PieceType] = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


@dataclass(frozen=True)
class Piece:
    """A piece owned by one colour."""

    colour: Colour
    kind: PieceType

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.kind]

    @property
    def symbol(self) -> str:
        return f"{self.colour.initial}{PIECE_SYMBOL[self.kind]}"
