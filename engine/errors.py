"""Exception types raised by the three-player chess engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from engine.board import Move


class ThreeChessError(Exception):
    """Base exception for rules engine errors."""


class ImpossiblePositionError(ThreeChessError, ValueError):
    """Raised when a step leaves the board."""


class IllegalMoveError(ImpossiblePositionError):
    """Raised when a move is rejected by the rules."""

    def __init__(self, move: "Move", reason: str = "illegal move") -> None:
        self.move = move
        super().__init__(f"{reason}: {move}")


class UnsupportedCloneError(ThreeChessError, RuntimeError):
    """Raised when a board snapshot cannot be taken."""


class NoLegalMovesError(ThreeChessError, RuntimeError):
    """Raised when the player to move has no legal move at all."""
