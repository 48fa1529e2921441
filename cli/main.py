"""CLI entrypoint for playing three-player chess between agents and humans."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ai.base_ai import BaseAI
from ai.config import AGENT_KINDS, AgentConfig, build_agent
from engine.board import Board, Move
from engine.pieces import Colour
from engine.rules import parse_position

LOGGER = logging.getLogger("threechess.cli")

HUMAN = "human"


@dataclass
class GameSummary:
    """Outcome of one game."""

    winner: Optional[Colour]
    is_draw: bool
    plies: int
    scores: Dict[Colour, int]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play three-player chess in the terminal.")
    choices = list(AGENT_KINDS) + [HUMAN]
    parser.add_argument("--blue", type=str, default="mcts", choices=choices, help="Blue player")
    parser.add_argument("--green", type=str, default="maxn", choices=choices, help="Green player")
    parser.add_argument("--red", type=str, default="paranoid", choices=choices, help="Red player")
    parser.add_argument("--config", type=str, default=None, help="Path to agent config JSON")
    parser.add_argument("--seed", type=int, default=None, help="Base seed for agent randomness")
    parser.add_argument("--max-plies", type=int, default=None, help="Stop the game after this many plies")
    parser.add_argument("--draw-limit", type=int, default=None, help="Plies without capture or pawn move before a draw")
    parser.add_argument("--quiet", action="store_true", help="Only print the result")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def parse_user_move(command: str) -> Optional[Move]:
    """Parse ``move BE2 BE4`` or ``BE2 BE4``; raises ValueError on bad squares."""
    parts = command.strip().split()
    if parts and parts[0].lower() == "move":
        parts = parts[1:]
    if len(parts) != 2:
        return None
    return Move(parse_position(parts[0]), parse_position(parts[1]))


def read_human_move(board: Board) -> Optional[Move]:
    """Prompt until a legal move is entered; None means the human quit."""
    while True:
        user_input = input(f"{board.current_turn.value}> ").strip()
        if user_input.lower() in {"quit", "exit"}:
            return None
        if user_input.lower() == "help":
            print("Commands: move <from> <to> (e.g. move BE2 BE4) | quit")
            continue
        try:
            move = parse_user_move(user_input)
        except ValueError as exc:
            print(f"Invalid square: {exc}")
            continue
        if move is None:
            print("Invalid command format.")
            continue
        if not board.is_legal_move(move.start, move.end):
            print("Illegal move for current state.")
            continue
        return move


def play_game(
    board: Board,
    agents: Dict[Colour, Optional[BaseAI]],
    max_plies: int,
    show: bool = True,
) -> GameSummary:
    """Play until the game ends, the ply cap is hit, or a human quits."""
    while True:
        terminal, winner, is_draw = board.game_over()
        if show:
            print()
            print(board.render_ascii())
            print(f"Turn: {board.current_turn.value} | Ply: {board.move_count} | No-progress: {board.no_progress_plies}")

        if terminal or board.move_count >= max_plies:
            if board.move_count >= max_plies and not terminal:
                LOGGER.info("Ply limit %d reached", max_plies)
            break

        agent = agents[board.current_turn]
        if agent is None:
            move = read_human_move(board)
            if move is None:
                print("Exiting game.")
                break
        else:
            move = agent.select_move(board)
        mover = board.current_turn
        result = board.apply_move(move)
        LOGGER.debug("%s played %s", mover.value, move)
        if show:
            label = "Human" if agent is None else str(agent)
            print(f"{label} ({mover.value}) move: {move}")
            if result.captured_piece is not None:
                print(f"Captured: {result.captured_piece.symbol}")
            if result.promoted:
                print("Pawn promoted to queen.")

    return GameSummary(
        winner=winner,
        is_draw=is_draw,
        plies=board.move_count,
        scores={colour: board.score(colour) for colour in board.players},
    )


def build_players(kinds: List[str], config: AgentConfig, seed: Optional[int]) -> Dict[Colour, Optional[BaseAI]]:
    agents: Dict[Colour, Optional[BaseAI]] = {}
    for idx, (colour, kind) in enumerate(zip(Colour, kinds)):
        if kind == HUMAN:
            agents[colour] = None
        else:
            agents[colour] = build_agent(kind, config, seed=None if seed is None else seed + idx)
    return agents


def run_cli(argv: Optional[Sequence[str]] = None) -> GameSummary:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = AgentConfig.from_json(args.config) if args.config else AgentConfig({})
    draw_limit = args.draw_limit if args.draw_limit is not None else config.draw_no_progress_limit
    max_plies = args.max_plies if args.max_plies is not None else config.max_plies

    board = Board(draw_no_progress_limit=draw_limit)
    agents = build_players([args.blue, args.green, args.red], config, args.seed)
    LOGGER.info(
        "Starting game. %s",
        " ".join(f"{colour.value}={agent or HUMAN}" for colour, agent in agents.items()),
    )

    summary = play_game(board, agents, max_plies=max_plies, show=not args.quiet)
    if summary.winner is not None:
        print(f"Winner: {summary.winner.value}")
    elif summary.is_draw:
        print("Game ended in draw.")
    else:
        print("Game stopped without a result.")
    print("Scores: " + ", ".join(f"{colour.value}={score}" for colour, score in summary.scores.items()))
    return summary


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
