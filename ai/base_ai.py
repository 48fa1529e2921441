"""Base AI interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from engine.board import Board, Move


class BaseAI(ABC):
    """Abstract move selection strategy contract."""

    name: str = "base"

    @abstractmethod
    def select_move(self, board: Board) -> Move:
        """Choose a legal move for the given board state."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name
