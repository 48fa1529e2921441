"""Board double that walks an explicit game tree.

Each node lists its moves in order; the double exposes just enough of the
``Board`` contract for the search code: positions, pieces whose step
patterns point straight at the scripted destinations, legality, cloning,
applying moves, terminal state and scores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from engine.board import Move, MoveResult
from engine.errors import IllegalMoveError, UnsupportedCloneError
from engine.pieces import Colour
from engine.rules import Position, parse_position

BLUE, GREEN, RED = Colour.BLUE, Colour.GREEN, Colour.RED


def mv(start: str, end: str) -> Move:
    return Move(parse_position(start), parse_position(end))


@dataclass
class Node:
    turn: Colour
    scores: Dict[Colour, int]
    winner: Optional[Colour] = None
    draw: bool = False
    edges: List[Tuple[Move, str]] = field(default_factory=list)


class GameTree:
    """Collection of scripted nodes keyed by name."""

    def __init__(self) -> None:
        self.nodes: Dict[str, Node] = {}

    def add(
        self,
        key: str,
        turn: Colour,
        scores: Sequence[int] = (0, 0, 0),
        winner: Optional[Colour] = None,
        draw: bool = False,
    ) -> str:
        self.nodes[key] = Node(turn=turn, scores=dict(zip(Colour, scores)), winner=winner, draw=draw)
        return key

    def link(self, parent: str, start: str, end: str, child: str) -> Move:
        move = mv(start, end)
        self.nodes[parent].edges.append((move, child))
        return move

    def board(self, key: str = "root", clone_fails: FrozenSet[str] = frozenset()) -> "ScriptedBoard":
        return ScriptedBoard(self, key, clone_fails=clone_fails)


class ScriptedBoard:
    players: Tuple[Colour, ...] = (BLUE, GREEN, RED)

    def __init__(
        self,
        tree: GameTree,
        key: str,
        history: Optional[List[Move]] = None,
        clone_fails: FrozenSet[str] = frozenset(),
    ) -> None:
        self.tree = tree
        self.key = key
        self.history: List[Move] = history or []
        self.clone_fails = clone_fails

    @property
    def node(self) -> Node:
        return self.tree.nodes[self.key]

    @property
    def current_turn(self) -> Colour:
        return self.node.turn

    @property
    def move_count(self) -> int:
        return len(self.history)

    def get_move(self, index: int) -> Move:
        return self.history[index]

    def get_positions(self, colour: Colour) -> List[Position]:
        if colour is not self.current_turn:
            return []
        starts: List[Position] = []
        for move, _ in self.node.edges:
            if move.start not in starts:
                starts.append(move.start)
        return starts

    def get_piece(self, position: Position) -> Optional[SimpleNamespace]:
        steps = tuple((move.end,) for move, _ in self.node.edges if move.start == position)
        if not steps:
            return None
        return SimpleNamespace(colour=self.current_turn, kind=SimpleNamespace(steps=steps, step_reps=1))

    def step(self, piece: SimpleNamespace, directions: Tuple[Position, ...], position: Position, reverse: bool = False) -> Position:
        return directions[-1]

    def is_legal_move(self, start: Position, end: Position) -> bool:
        terminal, _, _ = self.game_over()
        if terminal:
            return False
        return any(move == Move(start, end) for move, _ in self.node.edges)

    def clone(self) -> "ScriptedBoard":
        if self.key in self.clone_fails:
            raise UnsupportedCloneError(f"cannot clone {self.key}")
        return ScriptedBoard(self.tree, self.key, list(self.history), self.clone_fails)

    def apply_move(self, move: Move) -> MoveResult:
        if not self.is_legal_move(move.start, move.end):
            raise IllegalMoveError(move)
        child = next(key for edge, key in self.node.edges if edge == move)
        self.key = child
        self.history.append(move)
        _, winner, is_draw = self.game_over()
        return MoveResult(captured_piece=None, promoted=False, winner=winner, is_draw=is_draw)

    def game_over(self) -> Tuple[bool, Optional[Colour], bool]:
        node = self.node
        if node.winner is not None:
            return True, node.winner, False
        if node.draw:
            return True, None, True
        return False, None, False

    def score(self, colour: Colour) -> int:
        return self.node.scores[colour]
