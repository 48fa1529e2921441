"""Move enumeration and copy-on-transition helpers shared by all agents."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Set

from engine.board import Board, Move
from engine.errors import IllegalMoveError, ImpossiblePositionError, NoLegalMovesError, UnsupportedCloneError
from engine.pieces import Colour

LOGGER = logging.getLogger(__name__)


def legal_moves(board: Board) -> List[Move]:
    """
    Enumerate every legal move of the player to move.

    Destinations come from repeating each step pattern of each piece; a step
    that leaves the board ends that pattern. Candidates are kept only if the
    board accepts them, without duplicates, in enumeration order.
    """
    moves: List[Move] = []
    seen: Set[Move] = set()
    for start in board.get_positions(board.current_turn):
        piece = board.get_piece(start)
        if piece is None:
            continue
        for directions in piece.kind.steps:
            reverse = start.colour is not piece.colour
            current = start
            for _ in range(piece.kind.step_reps):
                try:
                    nxt = board.step(piece, directions, current, reverse)
                except ImpossiblePositionError:
                    break
                if nxt.colour is not current.colour:
                    reverse = not reverse
                current = nxt
                move = Move(start, current)
                if move not in seen and board.is_legal_move(start, current):
                    seen.add(move)
                    moves.append(move)
    return moves


def successor(board: Board, move: Move) -> Optional[Board]:
    """Return a new board with ``move`` applied, or None if it cannot be built."""
    try:
        child = board.clone()
        child.apply_move(move)
    except (IllegalMoveError, UnsupportedCloneError) as exc:
        LOGGER.debug("Skipping move %s: %s", move, exc)
        return None
    return child


def is_terminal(board: Board) -> bool:
    terminal, _, _ = board.game_over()
    return terminal


def find_winning_move(board: Board, player: Colour) -> Optional[Move]:
    """First move that ends the game immediately with ``player`` as winner."""
    for move in legal_moves(board):
        child = successor(board, move)
        if child is None:
            continue
        terminal, winner, _ = child.game_over()
        if terminal and winner is player:
            return move
    return None


def random_legal_move(board: Board, rng: random.Random) -> Move:
    """Uniformly random legal move; raises when there is none."""
    moves = legal_moves(board)
    if not moves:
        raise NoLegalMovesError(f"{board.current_turn.value} has no legal move")
    return rng.choice(moves)


def ensure_legal(board: Board, move: Optional[Move], rng: random.Random) -> Move:
    """Return ``move`` if the board accepts it, else a random legal move."""
    if move is not None and board.is_legal_move(move.start, move.end):
        return move
    fallback = random_legal_move(board, rng)
    LOGGER.warning("Search produced unusable move %s; falling back to %s", move, fallback)
    return fallback
