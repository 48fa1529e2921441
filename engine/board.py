"""Three-player chess board state and move legality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from engine.errors import IllegalMoveError, ImpossiblePositionError
from engine.pieces import BACK_RANK, Colour, Direction, Piece, PieceType, Step
from engine.rules import ALL_POSITIONS, SECTION_COLS, SECTION_ROWS, Position, neighbour

PAWN_ROW = 1


@dataclass(frozen=True)
class Move:
    """A move from one square to another."""

    start: Position
    end: Position

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class MoveResult:
    """Result metadata for an applied move."""

    captured_piece: Optional[Piece]
    promoted: bool
    winner: Optional[Colour]
    is_draw: bool


class Board:
    """Three-player chess board.

    The game ends as soon as a king is captured: the capturing colour wins and
    the king's owner loses. ``draw_no_progress_limit`` plies without a capture
    or pawn move end the game as a draw.
    """

    players: Tuple[Colour, ...] = tuple(Colour)

    def __init__(self, draw_no_progress_limit: int = 60, setup: bool = True) -> None:
        self.draw_no_progress_limit = draw_no_progress_limit
        self.current_turn = Colour.BLUE
        self.no_progress_plies = 0
        self.grid: Dict[Position, Piece] = {}
        self.history: List[Move] = []
        self.captured: Dict[Colour, List[Piece]] = {colour: [] for colour in self.players}
        self.winner: Optional[Colour] = None
        self.loser: Optional[Colour] = None
        if setup:
            self._setup_standard()

    @classmethod
    def empty(cls, current_turn: Colour = Colour.BLUE, draw_no_progress_limit: int = 60) -> "Board":
        """Board with no pieces, for composing custom positions."""
        board = cls(draw_no_progress_limit=draw_no_progress_limit, setup=False)
        board.current_turn = current_turn
        return board

    def _setup_standard(self) -> None:
        for colour in self.players:
            for column, kind in enumerate(BACK_RANK):
                self.grid[Position(colour, 0, column)] = Piece(colour, kind)
                self.grid[Position(colour, PAWN_ROW, column)] = Piece(colour, PieceType.PAWN)

    def place(self, position: Position, piece: Optional[Piece]) -> None:
        """Put a piece on a square, or clear it when ``piece`` is None."""
        if piece is None:
            self.grid.pop(position, None)
        else:
            self.grid[position] = piece

    def clone(self) -> "Board":
        """Copy board state; pieces are immutable so only containers are copied."""
        cloned = type(self).__new__(type(self))
        cloned.draw_no_progress_limit = self.draw_no_progress_limit
        cloned.current_turn = self.current_turn
        cloned.no_progress_plies = self.no_progress_plies
        cloned.grid = dict(self.grid)
        cloned.history = list(self.history)
        cloned.captured = {colour: list(pieces) for colour, pieces in self.captured.items()}
        cloned.winner = self.winner
        cloned.loser = self.loser
        return cloned

    def get_piece(self, position: Position) -> Optional[Piece]:
        """Return the piece on a square, if any."""
        return self.grid.get(position)

    def get_positions(self, colour: Colour) -> List[Position]:
        """Squares occupied by a colour, in board order."""
        return [pos for pos in ALL_POSITIONS if pos in self.grid and self.grid[pos].colour is colour]

    @property
    def move_count(self) -> int:
        return len(self.history)

    def get_move(self, index: int) -> Move:
        """Return the move played at a given ply."""
        return self.history[index]

    def step(self, piece: Piece, directions: Step, position: Position, reverse: bool = False) -> Position:
        """
        Apply one step pattern from a square.

        ``reverse`` flips every direction; it toggles whenever the step crosses
        into another section, since neighbouring sections face each other.
        """
        current = position
        for direction in directions:
            actual = direction.reversed() if reverse else direction
            nxt = neighbour(current, actual)
            if nxt.colour is not current.colour:
                reverse = not reverse
            current = nxt
        return current

    def walk(self, piece: Piece, directions: Step, start: Position) -> Iterator[Position]:
        """Yield successive squares reached by repeating a step pattern."""
        reverse = start.colour is not piece.colour
        current = start
        for _ in range(piece.kind.step_reps):
            try:
                nxt = self.step(piece, directions, current, reverse)
            except ImpossiblePositionError:
                return
            if nxt.colour is not current.colour:
                reverse = not reverse
            current = nxt
            yield current

    def is_legal_move(self, start: Position, end: Position) -> bool:
        """Return whether the player to move may move start -> end."""
        if self.winner is not None or self.no_progress_plies >= self.draw_no_progress_limit:
            return False
        piece = self.grid.get(start)
        if piece is None or piece.colour is not self.current_turn or start == end:
            return False
        target = self.grid.get(end)
        if target is not None and target.colour is piece.colour:
            return False
        if piece.kind is PieceType.PAWN:
            return self._pawn_can_reach(piece, start, end, target)

        for directions in piece.kind.steps:
            for position in self.walk(piece, directions, start):
                if position == end:
                    return True
                if position in self.grid:
                    break
        return False

    def _try_step(self, piece: Piece, directions: Step, start: Position) -> Optional[Position]:
        try:
            return self.step(piece, directions, start, start.colour is not piece.colour)
        except ImpossiblePositionError:
            return None

    def _pawn_can_reach(self, piece: Piece, start: Position, end: Position, target: Optional[Piece]) -> bool:
        forward = (Direction.FORWARD,)
        one = self._try_step(piece, forward, start)
        if end == one:
            return target is None

        if start.colour is piece.colour and start.row == PAWN_ROW and one is not None and one not in self.grid:
            two = self._try_step(piece, forward + forward, start)
            if end == two:
                return target is None

        for diagonal in ((Direction.FORWARD, Direction.LEFT), (Direction.FORWARD, Direction.RIGHT)):
            if end == self._try_step(piece, diagonal, start):
                return target is not None
        return False

    def move(self, start: Position, end: Position) -> MoveResult:
        """Shorthand for ``apply_move(Move(start, end))``."""
        return self.apply_move(Move(start, end))

    def apply_move(self, move: Move) -> MoveResult:
        """Apply a legal move in place and pass the turn."""
        if not self.is_legal_move(move.start, move.end):
            raise IllegalMoveError(move)

        mover = self.current_turn
        piece = self.grid.pop(move.start)
        captured_piece = self.grid.get(move.end)
        promoted = piece.kind is PieceType.PAWN and move.end.colour is not piece.colour and move.end.row == 0
        self.grid[move.end] = Piece(piece.colour, PieceType.QUEEN) if promoted else piece

        if captured_piece is not None:
            self.captured[mover].append(captured_piece)
            if captured_piece.kind is PieceType.KING:
                self.winner = mover
                self.loser = captured_piece.colour
        if captured_piece is not None or piece.kind is PieceType.PAWN:
            self.no_progress_plies = 0
        else:
            self.no_progress_plies += 1

        self.history.append(move)
        self.current_turn = mover.next()

        is_terminal, winner, is_draw = self.game_over()
        return MoveResult(
            captured_piece=captured_piece,
            promoted=promoted,
            winner=winner if is_terminal else None,
            is_draw=is_draw,
        )

    def game_over(self) -> Tuple[bool, Optional[Colour], bool]:
        """Return (is_terminal, winner, is_draw)."""
        if self.winner is not None:
            return True, self.winner, False
        if self.no_progress_plies >= self.draw_no_progress_limit:
            return True, None, True
        return False, None, False

    def score(self, colour: Colour) -> int:
        """Material on the board plus the value of captured pieces."""
        on_board = sum(piece.value for piece in self.grid.values() if piece.colour is colour)
        taken = sum(piece.value for piece in self.captured[colour])
        return on_board + taken

    def render_ascii(self) -> str:
        """Return a simple human-readable board representation."""
        lines: List[str] = []
        header = "      " + "  ".join(chr(ord("A") + c) for c in range(SECTION_COLS))
        for colour in self.players:
            lines.append(f"{colour.value.upper()}")
            lines.append(header)
            for row in reversed(range(SECTION_ROWS)):
                cells: List[str] = []
                for col in range(SECTION_COLS):
                    piece = self.grid.get(Position(colour, row, col))
                    cells.append(piece.symbol if piece is not None else "..")
                lines.append(f"  {row + 1}  " + " ".join(cells))
        return "\n".join(lines)
