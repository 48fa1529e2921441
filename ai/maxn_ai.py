"""MaxN search: every player maximises their own score."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, Optional

from ai.base_ai import BaseAI
from ai.moves import ensure_legal, legal_moves, successor
from ai.scoring import CONSISTENT, LOSS_SCORE, WIN_SCORE, check_leaf_policy
from engine.board import Board, Move
from engine.pieces import Colour
from engine.rules import Position

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreEntry:
    """Best known score of one player and the root-level move leading to it."""

    start: Optional[Position]
    end: Optional[Position]
    score: float

    @property
    def move(self) -> Optional[Move]:
        if self.start is None or self.end is None:
            return None
        return Move(self.start, self.end)


ScoreVector = Dict[Colour, ScoreEntry]


class MaxNAI(BaseAI):
    """Fixed-depth MaxN agent without pruning."""

    name = "maxn"

    def __init__(
        self,
        depth: int = 2,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        leaf_policy: str = CONSISTENT,
    ) -> None:
        self.depth = depth
        self._rng = rng or random.Random(seed)
        self.leaf_policy = check_leaf_policy(leaf_policy)
        self.nodes = 0

    def select_move(self, board: Board) -> Move:
        mover = board.current_turn
        self.nodes = 0
        result = self.maxn_search(board, self.depth, self.depth)
        entry = result[mover]
        LOGGER.debug(
            "MaxN selected %s with score %s after %d nodes",
            entry.move,
            entry.score,
            self.nodes,
        )
        return ensure_legal(board, entry.move, self._rng)

    def maxn_search(self, board: Board, depth: int, start_depth: int) -> ScoreVector:
        """
        Best reachable score vector for the player to move.

        When a move improves the mover's own score, the whole vector returned
        for it is adopted and tagged with that move.
        """
        self.nodes += 1
        mover = board.current_turn
        best: ScoreVector = {player: ScoreEntry(None, None, -math.inf) for player in board.players}

        for move in legal_moves(board):
            child = successor(board, move)
            if child is None:
                continue
            terminal, winner, _ = child.game_over()

            if depth == start_depth and terminal:
                if winner is mover:
                    best[mover] = ScoreEntry(move.start, move.end, WIN_SCORE)
                    return best
                # Never pick a move that ends the game without winning it.
                continue

            if depth == 0 or terminal:
                evaluated = self.evaluate(child)
            else:
                evaluated = self.maxn_search(child, depth - 1, start_depth)
                if evaluated[child.current_turn].move is None:
                    evaluated = self.evaluate(child)

            if evaluated[mover].score > best[mover].score:
                best = {
                    player: ScoreEntry(move.start, move.end, entry.score)
                    for player, entry in evaluated.items()
                }
        return best

    def evaluate(self, board: Board) -> ScoreVector:
        """Leaf score of every player."""
        terminal, winner, _ = board.game_over()
        scores: ScoreVector = {}
        for player in board.players:
            if self.leaf_policy == CONSISTENT and terminal and winner is not None:
                value = WIN_SCORE if player is winner else LOSS_SCORE
            else:
                value = board.score(player)
            scores[player] = ScoreEntry(None, None, value)
        return scores
