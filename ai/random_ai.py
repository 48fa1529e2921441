"""Uniformly random baseline agent."""

from __future__ import annotations

import random
from typing import Optional

from ai.base_ai import BaseAI
from ai.moves import random_legal_move
from engine.board import Board, Move


class RandomAI(BaseAI):
    """Plays a uniformly random legal move."""

    name = "random"

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random(seed)

    def select_move(self, board: Board) -> Move:
        return random_legal_move(board, self._rng)
