"""Paranoid search with alpha-beta pruning.

The root player maximises its own score; every other player is assumed to be
part of a coalition minimising it, which reduces the game to two sides.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

from ai.base_ai import BaseAI
from ai.moves import ensure_legal, legal_moves, successor
from ai.scoring import CONSISTENT, LOSS_SCORE, WIN_SCORE, check_leaf_policy
from engine.board import Board, Move
from engine.pieces import Colour
from engine.rules import Position

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Best move found at one ply and its score for the root player."""

    start: Optional[Position]
    end: Optional[Position]
    score: float

    @property
    def move(self) -> Optional[Move]:
        if self.start is None or self.end is None:
            return None
        return Move(self.start, self.end)


class ParanoidAI(BaseAI):
    """Fixed-depth paranoid alpha-beta agent."""

    name = "paranoid"

    def __init__(
        self,
        depth: int = 2,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        leaf_policy: str = CONSISTENT,
        pruning: bool = True,
    ) -> None:
        self.depth = depth
        self._rng = rng or random.Random(seed)
        self.leaf_policy = check_leaf_policy(leaf_policy)
        self.pruning = pruning
        self.nodes = 0
        self.cutoffs = 0

    def select_move(self, board: Board) -> Move:
        root = board.current_turn
        self.nodes = 0
        self.cutoffs = 0
        result = self.paranoid_search(board, self.depth, self.depth, root, -math.inf, math.inf)
        LOGGER.debug(
            "Paranoid selected %s with score %s after %d nodes (%d cutoffs)",
            result.move,
            result.score,
            self.nodes,
            self.cutoffs,
        )
        return ensure_legal(board, result.move, self._rng)

    def paranoid_search(
        self,
        board: Board,
        start_depth: int,
        depth: int,
        root: Colour,
        alpha: float,
        beta: float,
    ) -> SearchResult:
        self.nodes += 1
        maximizing = board.current_turn is root
        best = SearchResult(None, None, -math.inf if maximizing else math.inf)

        for move in legal_moves(board):
            child = successor(board, move)
            if child is None:
                continue
            terminal, winner, _ = child.game_over()

            if depth == start_depth and terminal:
                if winner is root:
                    return SearchResult(move.start, move.end, WIN_SCORE)
                continue

            if depth == 0 or terminal:
                score = self.evaluate(child, root)
            else:
                result = self.paranoid_search(child, start_depth, depth - 1, root, alpha, beta)
                score = result.score if result.move is not None else self.evaluate(child, root)

            if (maximizing and score > best.score) or (not maximizing and score < best.score):
                best = SearchResult(move.start, move.end, score)

            if maximizing:
                alpha = max(alpha, score)
            else:
                beta = min(beta, score)

            # A cutoff abandons every remaining move at this ply.
            if self.pruning and beta <= alpha:
                self.cutoffs += 1
                break
        return best

    def evaluate(self, board: Board, root: Colour) -> float:
        """Leaf score from the root player's point of view."""
        terminal, winner, _ = board.game_over()
        if self.leaf_policy == CONSISTENT:
            if terminal and winner is not None:
                return WIN_SCORE if winner is root else LOSS_SCORE
            return board.score(root)

        if terminal:
            return WIN_SCORE if winner is root else 0
        return board.score(board.current_turn)
