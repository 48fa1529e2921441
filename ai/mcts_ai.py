"""Monte Carlo Tree Search agent with random playouts."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from ai.base_ai import BaseAI
from ai.moves import ensure_legal, find_winning_move, is_terminal, legal_moves, successor
from engine.board import Board, Move
from engine.errors import UnsupportedCloneError
from engine.pieces import Colour

LOGGER = logging.getLogger(__name__)


@dataclass
class MCTSConfig:
    """Search budget and exploration settings."""

    time_limit_ms: float = 200.0
    exploration: float = 1.0
    max_iterations: Optional[int] = None


def upper_confidence_bounds(
    wins: np.ndarray,
    visits: np.ndarray,
    parent_visits: int,
    exploration: float = 1.0,
) -> np.ndarray:
    """UCB1 per node; unvisited nodes score +inf so they are tried first."""
    scores = np.full(visits.shape, np.inf, dtype=np.float64)
    visited = visits > 0
    if np.any(visited):
        n = visits[visited].astype(np.float64)
        exploit = wins[visited] / n
        explore = exploration * np.sqrt(np.log(max(parent_visits, 1)) / n)
        scores[visited] = exploit + explore
    return scores


def win_rates(wins: np.ndarray, visits: np.ndarray) -> np.ndarray:
    """wins/visits per node, 0 for unvisited nodes."""
    rates = np.zeros(visits.shape, dtype=np.float64)
    np.divide(wins, visits, out=rates, where=visits > 0)
    return rates


class MCTSNode:
    """A board in the search tree with its playout statistics."""

    def __init__(self, board: Board, parent: Optional["MCTSNode"] = None) -> None:
        self.board = board
        self.parent = parent
        self.children: List[MCTSNode] = []
        self.visits = 0
        self.wins = 0

    def add_child(self, board: Board) -> "MCTSNode":
        child = MCTSNode(board, parent=self)
        self.children.append(child)
        return child

    @property
    def played_move(self) -> Optional[Move]:
        """The move that produced this node's board from its parent's."""
        count = self.board.move_count
        if self.parent is None or count == 0:
            return None
        return self.board.get_move(count - 1)

    def upper_confidence_bound(self, exploration: float = 1.0) -> float:
        parent_visits = self.parent.visits if self.parent is not None else self.visits
        scores = upper_confidence_bounds(
            np.array([self.wins]),
            np.array([self.visits]),
            parent_visits,
            exploration,
        )
        return float(scores[0])

    @property
    def win_rate(self) -> float:
        return self.wins / self.visits if self.visits else 0.0


def _child_stats(children: Sequence[MCTSNode]) -> Tuple[np.ndarray, np.ndarray]:
    wins = np.fromiter((child.wins for child in children), dtype=np.float64, count=len(children))
    visits = np.fromiter((child.visits for child in children), dtype=np.int64, count=len(children))
    return wins, visits


class MonteCarloTree:
    """Search tree rooted at one board, evaluated for ``player``."""

    def __init__(
        self,
        board: Board,
        player: Colour,
        rng: random.Random,
        exploration: float = 1.0,
    ) -> None:
        self.root = MCTSNode(board)
        self.player = player
        self.exploration = exploration
        self._rng = rng
        self.iterations = 0

    def select_node(self, node: Optional[MCTSNode] = None) -> MCTSNode:
        """Descend by highest upper-confidence value until a node without children."""
        current = node or self.root
        while current.children:
            wins, visits = _child_stats(current.children)
            scores = upper_confidence_bounds(wins, visits, current.visits, self.exploration)
            current = current.children[int(np.argmax(scores))]
        return current

    def expand(self, node: MCTSNode) -> MCTSNode:
        """Attach one child per legal move and return a random one."""
        if is_terminal(node.board):
            return node
        for move in legal_moves(node.board):
            child_board = successor(node.board, move)
            if child_board is not None:
                node.add_child(child_board)
        if not node.children:
            return node
        return self._rng.choice(node.children)

    def simulate(self, node: MCTSNode) -> bool:
        """Play random moves on a copy until the game ends; True if ``player`` won."""
        try:
            board = node.board.clone()
        except UnsupportedCloneError as exc:
            LOGGER.debug("Cannot play out from node: %s", exc)
            return False
        while not is_terminal(board):
            moves = legal_moves(board)
            if not moves:
                break
            board.apply_move(self._rng.choice(moves))
        _, winner, _ = board.game_over()
        return winner is self.player

    def backpropagate(self, node: MCTSNode, won: bool) -> None:
        current: Optional[MCTSNode] = node
        while current is not None:
            current.visits += 1
            if won:
                current.wins += 1
            current = current.parent

    def run_iteration(self) -> MCTSNode:
        """One select/expand/simulate/backpropagate cycle."""
        selected = self.select_node()
        expanded = self.expand(selected)
        won = self.simulate(expanded)
        self.backpropagate(expanded, won)
        self.iterations += 1
        return expanded

    def best_move(self) -> Optional[Move]:
        """Move of the root child with the highest win rate."""
        children = self.root.children
        if not children:
            return None
        wins, visits = _child_stats(children)
        best = children[int(np.argmax(win_rates(wins, visits)))]
        return best.played_move


class MCTSAI(BaseAI):
    """Time-boxed MCTS agent."""

    name = "mcts"

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.config = config or MCTSConfig()
        self._rng = rng or random.Random(seed)
        self._clock = clock
        self.last_iterations = 0

    def select_move(self, board: Board) -> Move:
        player = board.current_turn
        winning = find_winning_move(board, player)
        if winning is not None:
            LOGGER.debug("MCTS found immediate win %s", winning)
            self.last_iterations = 0
            return winning

        tree = MonteCarloTree(board, player, self._rng, self.config.exploration)
        self.last_iterations = self._search(tree)
        move = tree.best_move()
        self._log_diagnostics(tree, move)
        return ensure_legal(board, move, self._rng)

    def _search(self, tree: MonteCarloTree) -> int:
        """Run iterations while the next one is expected to fit in the budget."""
        limit = self.config.time_limit_ms
        total_ms = 0.0
        average_ms = 0.0
        loops = 0
        while limit - total_ms > average_ms:
            if self.config.max_iterations is not None and loops >= self.config.max_iterations:
                break
            started = self._clock()
            tree.run_iteration()
            total_ms += (self._clock() - started) * 1000.0
            loops += 1
            average_ms = total_ms / loops
        return loops

    def _log_diagnostics(self, tree: MonteCarloTree, chosen: Optional[Move]) -> None:
        if not LOGGER.isEnabledFor(logging.DEBUG):
            return
        LOGGER.debug(
            "MCTS ran %d iterations, root visits=%d wins=%d chosen=%s",
            tree.iterations,
            tree.root.visits,
            tree.root.wins,
            chosen,
        )
        ranked = sorted(tree.root.children, key=lambda child: child.win_rate, reverse=True)
        for idx, child in enumerate(ranked[:3], start=1):
            LOGGER.debug(
                "Candidate #%d move=%s wins=%d visits=%d rate=%.3f",
                idx,
                child.played_move,
                child.wins,
                child.visits,
                child.win_rate,
            )
